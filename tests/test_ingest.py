import sys
from datetime import date, time
from decimal import Decimal
from pathlib import Path

from openpyxl import Workbook

sys.path.append(str(Path(__file__).resolve().parents[1]))

from payroll_engine.application import PayrollService
from payroll_engine.core.rules import PayrollRules, load_rules
from payroll_engine.extractors import attendance_sheet, detect, roster_sheet
from payroll_engine.infrastructure import InMemoryPayrollRepository


ROSTER_CSV = """Employee ID,First Name,Last Name,Rank,Position,Department,Basic Salary,Rice Subsidy,Phone Allowance,Clothing Allowance
1,Ana,Santos,RANK_AND_FILE,Clerk,Accounting,"35,200",1500,500,1000
2,Ben,Cruz,,Payroll Rank and File,HR,22000,,,
3,Carla,Reyes,NON_RANK_AND_FILE,Clerk,Accounting,44000,1500,500,1000
,Missing,Id,RANK_AND_FILE,Clerk,Accounting,1000,,,
"""

ATTENDANCE_CSV = """Employee ID,Date,Time In,Time Out
1,2024-03-04,08:00,17:00
1,2024-03-05,7:30 AM,6:00 PM
2,2024-03-04,08:30,
x,2024-03-04,08:00,17:00
"""


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_detect_recognises_roster_and_attendance(tmp_path):
    roster = _write(tmp_path, "roster.csv", ROSTER_CSV)
    attendance = _write(tmp_path, "punches.csv", ATTENDANCE_CSV)
    other = _write(tmp_path, "other.csv", "foo,bar\n1,2\n")

    assert detect.detect(roster).schema == "roster_sheet"
    assert detect.detect(attendance).schema == "attendance_sheet"
    assert detect.detect(other).schema == "unknown"
    assert detect.detect(tmp_path / "notes.txt").schema == "unknown"


def test_attendance_parser_reads_times_and_skips_bad_rows(tmp_path):
    result = attendance_sheet.parse(_write(tmp_path, "punches.csv", ATTENDANCE_CSV))

    assert len(result.records) == 3
    assert result.skipped == [5]
    first, second, third = result.records
    assert first == {"employee_id": 1, "date": date(2024, 3, 4), "time_in": time(8, 0), "time_out": time(17, 0)}
    assert second["time_in"] == time(7, 30)
    assert second["time_out"] == time(18, 0)
    assert third["time_out"] is None


def test_attendance_parser_reads_excel(tmp_path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Attendance"
    sheet.append(["Employee ID", "Date", "Time In", "Time Out"])
    sheet.append([7, date(2024, 3, 4), time(8, 0), time(17, 0)])
    path = tmp_path / "punches.xlsx"
    workbook.save(path)

    template = detect.detect(path)
    assert template.schema == "attendance_sheet"
    assert template.sheet == "Attendance"

    result = attendance_sheet.parse(path, sheet_name=template.sheet)
    assert result.records == [
        {"employee_id": 7, "date": date(2024, 3, 4), "time_in": time(8, 0), "time_out": time(17, 0)}
    ]


def test_roster_parser_builds_positions_and_employees(tmp_path):
    result = roster_sheet.parse(_write(tmp_path, "roster.csv", ROSTER_CSV))

    assert [row["employee_id"] for row in result.employees] == [1, 2, 3]
    ana, ben, carla = result.employees
    assert ana["monthly_basic_salary"] == Decimal("35200")
    assert ben["rank_classification"] == "RANK_AND_FILE"
    assert ana["position_id"] == carla["position_id"]

    positions = {row["position_id"]: row for row in result.positions}
    assert len(positions) == 2
    clerk = positions[ana["position_id"]]
    assert clerk["department"] == "Accounting"
    assert clerk["benefits"] == {
        "rice_subsidy": Decimal("1500"),
        "phone_allowance": Decimal("500"),
        "clothing_allowance": Decimal("1000"),
    }
    assert positions[ben["position_id"]]["benefits"] is None


def test_service_loads_parsed_rows(tmp_path):
    service = PayrollService(InMemoryPayrollRepository(), PayrollRules())
    roster = roster_sheet.parse(_write(tmp_path, "roster.csv", ROSTER_CSV))
    attendance = attendance_sheet.parse(_write(tmp_path, "punches.csv", ATTENDANCE_CSV))

    assert service.load_roster(roster) == 3
    assert service.load_attendance(attendance.records) == 3
    assert service.list_departments() == ["All", "Accounting", "HR"]

    summary = service.summary("2024-03")
    assert [slip.employee_id for slip in summary.payslips] == [1, 2]
    ana = summary.payslips[0]
    assert ana.hourly_rate == Decimal("200.00")
    assert ana.gross_income == Decimal("3200.00")
    assert ana.total_benefits == Decimal("3000.00")


def test_service_rejects_inconsistent_punches():
    service = PayrollService(InMemoryPayrollRepository(), PayrollRules())
    rows = [
        {"employee_id": 1, "date": date(2024, 3, 4), "time_in": None, "time_out": time(17, 0)},
        {"employee_id": 1, "date": date(2024, 3, 5), "time_in": time(17, 0), "time_out": time(8, 0)},
        {"employee_id": 1, "date": date(2024, 3, 6), "time_in": time(8, 0), "time_out": time(17, 0)},
    ]
    assert service.load_attendance(rows) == 1


def test_load_rules_reads_yaml_overrides(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        'work_window:\n  grace_cutoff: "08:15"\nwithholding_tax:\n  top_rate: "0.30"\n',
        encoding="utf-8",
    )
    rules = load_rules(path)
    assert rules.grace_cutoff == time(8, 15)
    assert rules.tax_top_rate == Decimal("0.30")
    assert rules.work_start == time(8, 0)
    assert rules.lunch_hours == Decimal("1")


def test_load_rules_falls_back_to_defaults(tmp_path):
    assert load_rules(tmp_path / "missing.yaml") == PayrollRules()


def test_bundled_rules_match_defaults():
    assert load_rules() == PayrollRules()
