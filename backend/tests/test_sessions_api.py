"""Teacher-facing HTTP endpoints."""
from datetime import date, time

import pytest

from tutorhub.models.class_session import ClassSession
from tutorhub.services.session_service import SessionService
from conftest import MONDAY

@pytest.fixture
def ongoing(teacher, klass, students):
    return SessionService.materialize_and_start(teacher, klass, MONDAY, time(9, 0))

def test_health(client):
    response = client.get('/api/sessions/health')
    assert response.status_code == 200
    assert response.get_json()['message'] == 'Sessions service is running'

def test_start_slot(client, teacher_headers, klass, students, timetable):
    payload = {'class_id': klass.id, 'date': '2024-01-01', 'time': '09:00'}

    response = client.post('/api/sessions/start-slot', json=payload, headers=teacher_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['status'] == 'ongoing'
    assert len(data['attendances']) == 3

    again = client.post('/api/sessions/start-slot', json=payload, headers=teacher_headers)
    assert again.status_code == 200
    assert again.get_json()['data']['id'] == data['id']
    assert ClassSession.query.count() == 1

def test_start_slot_validation(client, teacher_headers, klass):
    response = client.post('/api/sessions/start-slot',
                           json={'class_id': klass.id, 'date': '01/01/2024', 'time': '9am'},
                           headers=teacher_headers)
    assert response.status_code == 400

def test_start_slot_other_teacher_forbidden(client, other_headers, klass, students):
    response = client.post('/api/sessions/start-slot',
                           json={'class_id': klass.id, 'date': '2024-01-01', 'time': '09:00'},
                           headers=other_headers)
    assert response.status_code == 403
    assert response.get_json()['error'] is True

def test_list_sessions(client, teacher_headers, klass, ongoing):
    SessionService.create_session(klass, date(2024, 1, 3), time(9, 0))

    response = client.get('/api/sessions?per_page=1', headers=teacher_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert len(body['data']) == 1
    assert body['meta']['total'] == 2
    assert body['meta']['pages'] == 2
    assert body['meta']['statistics']['total'] == 2

    response = client.get('/api/sessions?status=ongoing', headers=teacher_headers)
    assert [s['id'] for s in response.get_json()['data']] == [ongoing.id]

    response = client.get('/api/sessions?status=bogus', headers=teacher_headers)
    assert response.status_code == 400

    response = client.get('/api/sessions?search=Maths', headers=teacher_headers)
    assert response.get_json()['meta']['total'] == 2

def test_list_excludes_other_teachers(client, other_headers, ongoing):
    response = client.get('/api/sessions', headers=other_headers)
    assert response.status_code == 200
    assert response.get_json()['data'] == []

def test_get_session(client, teacher_headers, other_headers, ongoing):
    response = client.get(f'/api/sessions/{ongoing.id}', headers=teacher_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['kpi_status'] == 'pending'
    assert data['attendance_rate'] == 0

    assert client.get(f'/api/sessions/{ongoing.id}', headers=other_headers).status_code == 403
    assert client.get('/api/sessions/9999', headers=teacher_headers).status_code == 404

def test_update_attendance(client, teacher_headers, ongoing, students):
    url = f'/api/sessions/{ongoing.id}/attendance/{students[0].id}'

    response = client.put(url, json={'status': 'present'}, headers=teacher_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['record']['status'] == 'present'
    assert data['record']['checked_in_at'] is not None
    assert data['attendance_rate'] == 33.3

    assert client.put(url, json={'status': 'asleep'}, headers=teacher_headers).status_code == 400
    assert client.put(url, json={}, headers=teacher_headers).status_code == 400

def test_bookmark_and_elapsed(client, teacher_headers, ongoing):
    response = client.put(f'/api/sessions/{ongoing.id}/bookmark',
                          json={'bookmark': 'Page 42'}, headers=teacher_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['teacher_notes'] == 'Page 42'

    response = client.get(f'/api/sessions/{ongoing.id}/elapsed', headers=teacher_headers)
    data = response.get_json()['data']
    assert data['status'] == 'ongoing'
    assert data['elapsed_seconds'] >= 0
    assert len(data['formatted']) == 8

def test_complete_flow(client, teacher_headers, ongoing):
    url = f'/api/sessions/{ongoing.id}/complete'

    short = client.post(url, json={'notes': 'ok'}, headers=teacher_headers)
    assert short.status_code == 400

    response = client.post(url, json={'notes': 'Covered chapter 3'}, headers=teacher_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['status'] == 'completed'
    assert data['allowance_amount'] == 50.0

    cancel = client.post(f'/api/sessions/{ongoing.id}/cancel', headers=teacher_headers)
    assert cancel.status_code == 409

    start = client.post(f'/api/sessions/{ongoing.id}/start', headers=teacher_headers)
    assert start.status_code == 409

def test_cancel_and_no_show(client, teacher_headers, klass):
    first = SessionService.create_session(klass, MONDAY, time(9, 0))
    second = SessionService.create_session(klass, MONDAY, time(14, 0))

    response = client.post(f'/api/sessions/{first.id}/cancel', headers=teacher_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['status'] == 'cancelled'

    response = client.post(f'/api/sessions/{second.id}/no-show',
                           json={'reason': 'Nobody came'}, headers=teacher_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['teacher_notes'] == 'Nobody came'

def test_export_csv(client, teacher_headers, ongoing):
    response = client.get('/api/sessions/export', headers=teacher_headers)
    assert response.status_code == 200
    assert response.mimetype == 'text/csv'
    assert 'attachment' in response.headers['Content-Disposition']
    lines = response.get_data(as_text=True).strip().splitlines()
    assert lines[0].startswith('Date,Time,Class,Course')
    assert len(lines) == 2

def test_timetable_endpoint(client, teacher_headers, klass, timetable):
    response = client.get('/api/timetable?view=week&date=2024-01-03', headers=teacher_headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body['meta']['start_date'] == '2024-01-01'
    assert body['meta']['total'] == 3
    assert body['meta']['virtual'] == 3
    assert body['data'][0]['is_virtual'] is True

    response = client.get('/api/timetable?view=week&date=yesterday', headers=teacher_headers)
    assert response.status_code == 400

    response = client.get('/api/timetable?view=list&date=2024-01-01', headers=teacher_headers)
    assert response.get_json()['meta']['end_date'] == '2024-01-30'

def test_dashboard(client, teacher_headers, klass, timetable):
    response = client.get('/api/dashboard', headers=teacher_headers)
    assert response.status_code == 200
    data = response.get_json()['data']
    for key in ('today', 'weekly_stats', 'monthly_earnings', 'upcoming', 'recent_activity'):
        assert key in data
    assert data['monthly_earnings_display'].startswith('RM ')

def test_classes_endpoints(client, teacher_headers, other_headers, teacher, klass, ongoing):
    SessionService.complete_session(teacher, ongoing, 'Covered chapter 3')

    response = client.get('/api/classes', headers=teacher_headers)
    assert response.status_code == 200
    assert response.get_json()['data'][0]['id'] == klass.id

    response = client.get(f'/api/classes/{klass.id}', headers=teacher_headers)
    data = response.get_json()['data']
    assert data['statistics']['completed_sessions'] == 1
    assert data['sessions_by_month'][0]['label'] == 'January 2024'
    assert data['sessions_by_month'][0]['sessions'][0]['id'] == ongoing.id

    response = client.get(f'/api/classes/{klass.id}/students', headers=teacher_headers)
    assert response.get_json()['meta']['total'] == 3

    assert client.get(f'/api/classes/{klass.id}', headers=other_headers).status_code == 403
