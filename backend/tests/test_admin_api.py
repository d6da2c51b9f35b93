"""Admin scheduling, verification and payslip endpoints."""
from datetime import time

import pytest

from tutorhub.services.session_service import SessionService
from conftest import MONDAY

@pytest.fixture
def completed(teacher, klass, students):
    session = SessionService.materialize_and_start(teacher, klass, MONDAY, time(9, 0))
    return SessionService.complete_session(teacher, session, 'Covered chapter 3')

def test_admin_only(client, teacher_headers):
    response = client.post('/api/admin/sessions', json={}, headers=teacher_headers)
    assert response.status_code == 403

def test_schedule_session(client, admin_headers, klass):
    payload = {'class_id': klass.id, 'date': '2024-01-01', 'time': '09:00', 'duration_minutes': 90}

    response = client.post('/api/admin/sessions', json=payload, headers=admin_headers)
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['status'] == 'scheduled'
    assert data['duration_minutes'] == 90

    duplicate = client.post('/api/admin/sessions', json=payload, headers=admin_headers)
    assert duplicate.status_code == 400

def test_schedule_session_validation(client, admin_headers, klass):
    response = client.post('/api/admin/sessions', json={'class_id': klass.id}, headers=admin_headers)
    assert response.status_code == 400

    response = client.post('/api/admin/sessions',
                           json={'class_id': 9999, 'date': '2024-01-01', 'time': '09:00'},
                           headers=admin_headers)
    assert response.status_code == 404

def test_payroll_flow(client, admin_headers, teacher_headers, teacher, completed):
    response = client.post(f'/api/admin/sessions/{completed.id}/verify', headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['verified_at'] is not None

    response = client.post('/api/admin/payslips',
                           json={'teacher_id': teacher.id, 'month': '2024-01'},
                           headers=admin_headers)
    assert response.status_code == 201
    payslip = response.get_json()['data']
    assert payslip['total_amount'] == 50.0
    assert payslip['sessions'][0]['payout_status'] == 'included_in_payslip'

    response = client.post(f"/api/admin/payslips/{payslip['id']}/pay", headers=admin_headers)
    assert response.status_code == 409

    response = client.post(f"/api/admin/payslips/{payslip['id']}/finalize", headers=admin_headers)
    assert response.get_json()['data']['status'] == 'finalized'

    response = client.post(f"/api/admin/payslips/{payslip['id']}/pay", headers=admin_headers)
    assert response.get_json()['data']['status'] == 'paid'

    response = client.get('/api/payslips', headers=teacher_headers)
    assert response.status_code == 200
    assert [p['month'] for p in response.get_json()['data']] == ['2024-01']

    response = client.get(f"/api/payslips/{payslip['id']}", headers=teacher_headers)
    assert response.get_json()['data']['sessions'][0]['payout_status'] == 'paid'

def test_verify_unknown_session(client, admin_headers):
    response = client.post('/api/admin/sessions/9999/verify', headers=admin_headers)
    assert response.status_code == 404

def test_swagger_spec(client):
    response = client.get('/api/swagger.json')
    assert response.status_code == 200
    paths = response.get_json()['paths']
    assert '/sessions/start-slot' in paths
    assert '/sessions/{session_id}/complete' in paths
