"""
src/data/mock.py
────────────────
Static mock records per domain.

Each page seeds its own store from these lists; nothing here is mutated at
runtime (callers receive copies via `seed()`).
"""
from __future__ import annotations

from src.data.models import (
    CalibrationRecord,
    Credential,
    EmissionSource,
    Equipment,
    Failure,
    KpiMetrics,
    MaterialStock,
    Organization,
    PreventiveMaster,
    PreventiveOrder,
    Record,
    ReductionActivity,
    Scope3Emission,
    Sensor,
    TPMActivity,
    TPMTeam,
    User,
)

# ── Credentials (mock login) ──────────────────────────────────────────────────

MOCK_CREDENTIALS: list[Credential] = [
    Credential(
        id="1", username="admin", password="admin123", name="김관리자",
        email="admin@company.com", level="admin", department="정보시스템팀",
        position="팀장", company="ABC 제조", company_id="company1",
    ),
    Credential(
        id="2", username="user1", password="user123", name="이기사",
        email="user1@company.com", level="user", department="생산1팀",
        position="기사", company="ABC 제조", company_id="company1",
    ),
    Credential(
        id="3", username="manager", password="manager123", name="박매니저",
        email="manager@company.com", level="manager", department="설비관리팀",
        position="과장", company="XYZ 산업", company_id="company2",
    ),
]

COMPANIES: list[dict[str, str]] = [
    {"label": "ABC 제조", "value": "company1"},
    {"label": "XYZ 산업", "value": "company2"},
]

# ── Equipment / failures ──────────────────────────────────────────────────────

EQUIPMENT: list[Equipment] = [
    Equipment(id="EQ-001", code="COMP-001", name="공기압축기 #1", type="compressor",
              location="공장동 A", department="생산1팀", status="running",
              priority="high", install_date="2019-03-15"),
    Equipment(id="EQ-002", code="CONV-001", name="메인 컨베이어", type="conveyor",
              location="공장동 A", department="생산1팀", status="running",
              priority="medium", install_date="2018-07-01"),
    Equipment(id="EQ-003", code="PUMP-001", name="냉각수 펌프 #1", type="pump",
              location="유틸리티동", department="설비관리팀", status="maintenance",
              priority="high", install_date="2020-01-20"),
    Equipment(id="EQ-004", code="ROBOT-001", name="용접 로봇 #1", type="robot",
              location="공장동 B", department="생산2팀", status="failure",
              priority="critical", install_date="2021-05-10"),
    Equipment(id="EQ-005", code="CRANE-001", name="천장 크레인", type="crane",
              location="공장동 B", department="설비관리팀", status="stopped",
              priority="low", install_date="2015-11-30"),
]

FAILURES: list[Failure] = [
    Failure(id="F-001", equipment_id="EQ-004", equipment_name="용접 로봇 #1",
            failure_type="electrical", description="서보 모터 과열",
            reported_at="2024-06-03", status="open", downtime_hours=6.5),
    Failure(id="F-002", equipment_id="EQ-003", equipment_name="냉각수 펌프 #1",
            failure_type="mechanical", description="베어링 소음",
            reported_at="2024-05-28", status="in_progress", downtime_hours=3.0),
    Failure(id="F-003", equipment_id="EQ-001", equipment_name="공기압축기 #1",
            failure_type="mechanical", description="압력 저하",
            reported_at="2024-05-12", status="closed", downtime_hours=1.5),
]

# ── Sensors ───────────────────────────────────────────────────────────────────

SENSORS: list[Sensor] = [
    Sensor(id="S-001", name="압축기 토출 온도", type="temperature", equipment_id="EQ-001",
           location="공장동 A", unit="°C", status="active", min_value=20.0, max_value=85.0,
           last_value=62.4),
    Sensor(id="S-002", name="압축기 진동", type="vibration", equipment_id="EQ-001",
           location="공장동 A", unit="mm/s", status="active", min_value=0.0, max_value=7.1,
           last_value=2.1),
    Sensor(id="S-003", name="냉각수 압력", type="pressure", equipment_id="EQ-003",
           location="유틸리티동", unit="bar", status="warning", min_value=2.0, max_value=6.0,
           last_value=6.4),
    Sensor(id="S-004", name="로봇 전류", type="current", equipment_id="EQ-004",
           location="공장동 B", unit="A", status="error", min_value=0.0, max_value=30.0,
           last_value=None),
    Sensor(id="S-005", name="창고 습도", type="humidity", equipment_id="",
           location="자재창고", unit="%", status="inactive", min_value=30.0, max_value=70.0,
           last_value=48.0),
]

# ── KPI ───────────────────────────────────────────────────────────────────────

KPI_METRICS: list[KpiMetrics] = [
    KpiMetrics(id="K-001", equipment_id="EQ-001", equipment_name="공기압축기 #1",
               mtbf=720.0, mttr=2.5, availability=98.2, oee=85.4, health_score=92.0,
               health_grade="A", risk_level="low", trend="stable", last_updated="2024-06-01"),
    KpiMetrics(id="K-002", equipment_id="EQ-002", equipment_name="메인 컨베이어",
               mtbf=540.0, mttr=3.1, availability=96.5, oee=81.0, health_score=84.0,
               health_grade="B", risk_level="low", trend="improving", last_updated="2024-06-01"),
    KpiMetrics(id="K-003", equipment_id="EQ-003", equipment_name="냉각수 펌프 #1",
               mtbf=310.0, mttr=5.8, availability=91.3, oee=72.6, health_score=68.0,
               health_grade="D", risk_level="medium", trend="declining", last_updated="2024-06-01"),
    KpiMetrics(id="K-004", equipment_id="EQ-004", equipment_name="용접 로봇 #1",
               mtbf=150.0, mttr=9.2, availability=82.0, oee=61.5, health_score=45.0,
               health_grade="F", risk_level="critical", trend="declining", last_updated="2024-06-01"),
    KpiMetrics(id="K-005", equipment_id="EQ-005", equipment_name="천장 크레인",
               mtbf=980.0, mttr=4.0, availability=95.0, oee=76.2, health_score=77.0,
               health_grade="C", risk_level="high", trend="stable", last_updated="2024-06-01"),
]

# ── Preventive maintenance ────────────────────────────────────────────────────

PREVENTIVE_MASTERS: list[PreventiveMaster] = [
    PreventiveMaster(id="PM-001", code="PM-COMP-001", name="압축기 3개월 점검",
                     equipment_id="EQ-001", equipment_name="공기압축기 #1",
                     interval_months=3, estimated_duration=120, estimated_cost=350000,
                     effective_date="2024-01-01", last_executed_date="2024-04-02",
                     next_schedule_date="2024-07-02"),
    PreventiveMaster(id="PM-002", code="PM-PUMP-001", name="펌프 월간 윤활",
                     equipment_id="EQ-003", equipment_name="냉각수 펌프 #1",
                     interval_months=1, estimated_duration=45, estimated_cost=80000,
                     effective_date="2024-01-01", last_executed_date="2024-05-20",
                     next_schedule_date="2024-06-20"),
    PreventiveMaster(id="PM-003", code="PM-CONV-001", name="컨베이어 벨트 장력 점검",
                     equipment_id="EQ-002", equipment_name="메인 컨베이어",
                     interval_days=14, estimated_duration=30, estimated_cost=20000,
                     effective_date="2024-02-01", is_active=False),
]

PREVENTIVE_ORDERS: list[PreventiveOrder] = [
    PreventiveOrder(id="PO-001", order_number="WO-2024-0601", master_id="PM-002",
                    equipment_id="EQ-003", equipment_name="냉각수 펌프 #1",
                    status="PLANNED", priority="medium", scheduled_date="2024-06-20",
                    assigned_to_name="이기사", estimated_cost=80000),
    PreventiveOrder(id="PO-002", order_number="WO-2024-0602", master_id="PM-001",
                    equipment_id="EQ-001", equipment_name="공기압축기 #1",
                    status="IN_PROGRESS", priority="high", scheduled_date="2024-06-20",
                    assigned_to_name="박매니저", estimated_cost=350000),
    PreventiveOrder(id="PO-003", order_number="WO-2024-0520", master_id="PM-002",
                    equipment_id="EQ-003", equipment_name="냉각수 펌프 #1",
                    status="COMPLETED", priority="medium", scheduled_date="2024-05-20",
                    completed_date="2024-05-20", assigned_to_name="이기사",
                    estimated_cost=80000),
    PreventiveOrder(id="PO-004", order_number="WO-2024-0510", master_id="PM-003",
                    equipment_id="EQ-002", equipment_name="메인 컨베이어",
                    status="OVERDUE", priority="critical", scheduled_date="2024-05-10",
                    assigned_to_name="김관리자", estimated_cost=20000),
]

# ── Materials ─────────────────────────────────────────────────────────────────

MATERIAL_STOCKS: list[MaterialStock] = [
    MaterialStock(id="M-001", material_code="BRG-6205", material_name="베어링 6205",
                  warehouse_name="중앙창고", location="A-01-03", current_stock=48,
                  safety_stock=20, unit="EA", unit_price=12000, total_value=576000,
                  status="normal", last_updated="2024-06-01"),
    MaterialStock(id="M-002", material_code="BLT-V100", material_name="V벨트 B-100",
                  warehouse_name="중앙창고", location="A-02-01", current_stock=5,
                  safety_stock=10, unit="EA", unit_price=25000, total_value=125000,
                  status="low", last_updated="2024-05-29"),
    MaterialStock(id="M-003", material_code="OIL-ISO68", material_name="유압유 ISO VG68",
                  warehouse_name="위험물창고", location="H-01", current_stock=0,
                  safety_stock=4, unit="DR", unit_price=180000, total_value=0,
                  status="out", last_updated="2024-05-20"),
    MaterialStock(id="M-004", material_code="FLT-AIR01", material_name="에어필터",
                  warehouse_name="중앙창고", location="B-01-01", current_stock=120,
                  safety_stock=15, unit="EA", unit_price=8000, total_value=960000,
                  status="excess", last_updated="2024-06-02"),
]

# ── TPM ───────────────────────────────────────────────────────────────────────

TPM_TEAMS: list[TPMTeam] = [
    TPMTeam(id="T-001", code="TPM-A", name="자주보전 1분임조", department="생산1팀",
            leader_name="이기사", member_count=6, equipment_area="공장동 A",
            meeting_day="화", status="active"),
    TPMTeam(id="T-002", code="TPM-B", name="개별개선 분임조", department="설비관리팀",
            leader_name="박매니저", member_count=4, equipment_area="유틸리티동",
            meeting_day="목", status="active"),
]

TPM_ACTIVITIES: list[TPMActivity] = [
    TPMActivity(id="A-001", activity_no="TPM-2024-001", title="압축기 초기청소",
                team_id="T-001", team_name="자주보전 1분임조", activity_type="autonomous",
                status="in_progress", priority="high", start_date="2024-05-01",
                end_date="2024-06-30", completion_rate=60),
    TPMActivity(id="A-002", activity_no="TPM-2024-002", title="펌프 누유 개선",
                team_id="T-002", team_name="개별개선 분임조", activity_type="focused",
                status="planned", priority="normal", start_date="2024-07-01",
                end_date="2024-08-31", completion_rate=0),
]

# ── Metering ──────────────────────────────────────────────────────────────────

CALIBRATIONS: list[CalibrationRecord] = [
    CalibrationRecord(id="C-001", instrument_code="PG-001", instrument_name="압력계 #1",
                      location="유틸리티동", calibration_date="2023-06-15",
                      next_calibration_date="2024-06-15", result="pass",
                      status="scheduled", agency="KTL", cost=55000),
    CalibrationRecord(id="C-002", instrument_code="TG-004", instrument_name="온도계 #4",
                      location="공장동 A", calibration_date="2023-06-20",
                      next_calibration_date="2024-06-20", result="pass",
                      status="scheduled", agency="KTC", cost=40000),
    CalibrationRecord(id="C-003", instrument_code="FM-002", instrument_name="유량계 #2",
                      location="유틸리티동", calibration_date="2023-05-01",
                      next_calibration_date="2024-05-01", result="conditional",
                      status="overdue", agency="KTL", cost=120000),
]

# ── Carbon ────────────────────────────────────────────────────────────────────

EMISSION_SOURCES: list[EmissionSource] = [
    EmissionSource(id="1", name="보일러 #1", type="설비", location="공장동 A"),
    EmissionSource(id="2", name="생산라인 2", type="공정", location="공장동 B"),
    EmissionSource(id="3", name="연구동 냉각탑", type="설비", location="연구동"),
]

REDUCTION_ACTIVITIES: list[ReductionActivity] = [
    ReductionActivity(id="1", name="고효율 모터 교체", type="설비 개선",
                      start="2024-01-01", end="2024-03-31", status="진행중"),
    ReductionActivity(id="2", name="공정 최적화", type="공정 개선",
                      start="2024-02-15", end="2024-06-30", status="계획"),
]

SCOPE3_EMISSIONS: list[Scope3Emission] = [
    Scope3Emission(id="1", partner="A사", activity="물류", emission=120),
    Scope3Emission(id="2", partner="B사", activity="원자재 공급", emission=340),
]

# ── Organization / users ──────────────────────────────────────────────────────

ORGANIZATIONS: list[Organization] = [
    Organization(id="O-001", code="ABC", name="ABC 제조", type="company", sort_order=1),
    Organization(id="O-002", code="ABC-PRD", name="생산본부", type="department",
                 parent_id="O-001", sort_order=1),
    Organization(id="O-003", code="ABC-PRD-1", name="생산1팀", type="team",
                 parent_id="O-002", sort_order=1),
    Organization(id="O-004", code="ABC-MNT", name="설비관리팀", type="team",
                 parent_id="O-002", sort_order=2),
]

USERS: list[User] = [
    User.model_validate(c.model_dump(exclude={"password"})) for c in MOCK_CREDENTIALS
]


def seed(records: list[Record]) -> list[dict]:
    """Fresh JSON-ready copies of a mock list for a page store."""
    return [r.model_dump(mode="json") for r in records]
