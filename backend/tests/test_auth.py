"""Test authentication endpoints."""
import json
from conftest import auth_headers

def test_health_check(client):
    """Test auth health endpoint."""
    response = client.get('/api/auth/health')
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['message'] == 'Auth service is running'

def test_app_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'

def test_login_success(client, teacher):
    """Test successful login."""
    response = client.post('/api/auth/login', json={
        'email': 'teacher@example.com',
        'password': 'password123'
    })

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['error'] == False
    assert 'access_token' in data['data']
    assert data['data']['user']['role'] == 'teacher'
    assert data['data']['teacher']['teacher_code'] == teacher.teacher_code

def test_login_invalid_credentials(client, teacher):
    """Test login with invalid credentials."""
    response = client.post('/api/auth/login', json={
        'email': 'teacher@example.com',
        'password': 'wrongpassword'
    })

    assert response.status_code == 401
    assert teacher.user.failed_login_attempts == 1

def test_login_validation(client):
    response = client.post('/api/auth/login', json={})
    assert response.status_code == 400

    response = client.post('/api/auth/login', json={'email': 'not-an-email', 'password': 'x'})
    assert response.status_code == 401

def test_get_current_user(client, teacher):
    """Test get current user profile."""
    login_response = client.post('/api/auth/login', json={
        'email': 'teacher@example.com',
        'password': 'password123'
    })
    token = json.loads(login_response.data)['data']['access_token']

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['data']['email'] == 'teacher@example.com'
    assert data['data']['teacher']['id'] == teacher.id

def test_refresh_token(client, teacher):
    login_response = client.post('/api/auth/login', json={
        'email': 'teacher@example.com',
        'password': 'password123'
    })
    refresh = login_response.get_json()['data']['refresh_token']

    response = client.post('/api/auth/refresh', headers={'Authorization': f'Bearer {refresh}'})
    assert response.status_code == 200
    assert 'access_token' in response.get_json()['data']

def test_missing_token(client):
    response = client.get('/api/sessions')
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Authorization token required'

def test_teacher_endpoint_rejects_admin(client, admin):
    response = client.get('/api/sessions', headers=auth_headers(admin))
    assert response.status_code == 403
