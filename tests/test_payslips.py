import pytest

from conftest import login


@pytest.fixture
def teacher_id(client):
    return login(client, "teacher", "teacher")["user"]["teacher_id"]


def payslip(teacher_id, month, year=2025, **overrides):
    payload = {
        "teacher_id": teacher_id,
        "month": month,
        "year": year,
        "base_salary": 3000,
        "allowances": 250.5,
        "overtime": 100,
        "deductions": 50,
        "tax": 300.25,
    }
    payload.update(overrides)
    return payload


def test_hr_creates_payslip_with_computed_net_pay(client, hr_headers, teacher_id):
    response = client.post(
        "/api/payslips", json=payslip(teacher_id, "March"), headers=hr_headers
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["net_pay"] == 3000.25
    assert data["status"] == "pending"


def test_client_cannot_set_net_pay(client, hr_headers, teacher_id):
    response = client.post(
        "/api/payslips",
        json=payslip(teacher_id, "April", net_pay=999999),
        headers=hr_headers,
    )
    assert response.json()["data"]["net_pay"] == 3000.25


def test_duplicate_month_conflicts(client, admin_headers, teacher_id):
    client.post("/api/payslips", json=payslip(teacher_id, "May"), headers=admin_headers)
    response = client.post(
        "/api/payslips", json=payslip(teacher_id, "May"), headers=admin_headers
    )
    assert response.status_code == 409


def test_negative_amounts_rejected(client, hr_headers, teacher_id):
    response = client.post(
        "/api/payslips", json=payslip(teacher_id, "June", tax=-1), headers=hr_headers
    )
    assert response.status_code == 400


def test_unknown_month_rejected(client, hr_headers, teacher_id):
    response = client.post(
        "/api/payslips", json=payslip(teacher_id, "Smarch"), headers=hr_headers
    )
    assert response.status_code == 400


def test_teachers_cannot_issue_payslips(client, teacher_headers, teacher_id):
    response = client.post(
        "/api/payslips", json=payslip(teacher_id, "July"), headers=teacher_headers
    )
    assert response.status_code == 403


def test_my_payslips_summary(client, hr_headers, teacher_headers, teacher_id):
    client.post("/api/payslips", json=payslip(teacher_id, "January", 2024), headers=hr_headers)
    client.post(
        "/api/payslips",
        json=payslip(teacher_id, "November", 2025, base_salary=4000),
        headers=hr_headers,
    )
    client.post("/api/payslips", json=payslip(teacher_id, "February", 2025), headers=hr_headers)

    data = client.get("/api/payslips/my", headers=teacher_headers).json()["data"]
    assert [(p["month"], p["year"]) for p in data["payslips"]] == [
        ("November", 2025),
        ("February", 2025),
        ("January", 2024),
    ]
    assert data["available_years"] == [2025, 2024]
    assert data["total_earned"] == 10000.75
    assert data["average_monthly"] == 3333.58

    data = client.get("/api/payslips/my?year=2024", headers=teacher_headers).json()["data"]
    assert len(data["payslips"]) == 1
    assert data["total_earned"] == 3000.25
    assert data["available_years"] == [2025, 2024]


def test_my_payslips_without_any(client, teacher_headers):
    data = client.get("/api/payslips/my", headers=teacher_headers).json()["data"]
    assert data["payslips"] == []
    assert data["total_earned"] == 0
    assert data["average_monthly"] == 0


def test_list_and_mark_paid(client, hr_headers, teacher_id):
    created = client.post(
        "/api/payslips", json=payslip(teacher_id, "August"), headers=hr_headers
    ).json()["data"]

    rows = client.get(f"/api/payslips?teacher_id={teacher_id}", headers=hr_headers).json()["data"]
    assert [r["id"] for r in rows] == [created["id"]]

    response = client.patch(
        f"/api/payslips/{created['id']}/status",
        json={"status": "paid", "pay_date": "2025-08-31"},
        headers=hr_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "paid"
    assert response.json()["data"]["pay_date"] == "2025-08-31"
