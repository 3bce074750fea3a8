import io
import json
from datetime import datetime, timedelta, timezone

import pytest

import app as app_module
from app import create_app
from config import TestingConfig
from detection.service import AnalysisError


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        with app.app_context():
            yield client


def login(client, email='alice@example.com', password='secret123'):
    return client.post('/login', data={'email': email, 'password': password})


def test_index_redirects_to_login(client):
    response = client.get('/')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_login_page(client):
    response = client.get('/login')
    assert response.status_code == 200
    assert b"Welcome to Phishguard" in response.data


def test_checker_requires_login(client):
    response = client.get('/checker')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']


def test_login_invalid(client):
    response = login(client, password='123')
    assert response.status_code == 200
    assert b"Invalid credentials" in response.data


def test_signup_invalid(client):
    response = client.post('/signup', data={'email': 'not-an-email', 'password': 'secret123'})
    assert b"Please fill all fields correctly." in response.data


def test_login_and_logout(client):
    response = login(client)
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/checker')

    response = client.get('/checker')
    assert response.status_code == 200
    assert b"Email Phishing Checker" in response.data

    client.get('/logout')
    assert client.get('/checker').status_code == 302


def test_login_redirects_to_local_next_only(client):
    response = client.post('/login?next=//evil.example/',
                           data={'email': 'a@b.co', 'password': 'secret123'})
    assert response.headers['Location'].endswith('/checker')


def test_checker_analyzes_text(client):
    login(client)
    response = client.post('/checker', data={'email_content': 'YOU ARE A WINNER'})
    assert response.status_code == 200
    assert b'data-verdict="PHISHING"' in response.data
    assert b"High-risk phrase found" in response.data


def test_checker_empty_input(client):
    login(client)
    response = client.post('/checker', data={'email_content': '   '})
    assert response.status_code == 200
    assert b"Please provide email content to analyze." in response.data
    assert b"data-verdict" not in response.data


def test_checker_file_upload_replaces_text(client):
    login(client)
    data = {
        'email_content': 'Hi Mom, see you later.',
        'email_file': (io.BytesIO(b'Please click here'), 'message.eml'),
    }
    response = client.post('/checker', data=data, content_type='multipart/form-data')
    assert b'data-verdict="SUSPICIOUS"' in response.data


def test_checker_rejects_other_file_types(client):
    login(client)
    data = {'email_file': (io.BytesIO(b'winner'), 'message.pdf')}
    response = client.post('/checker', data=data, content_type='multipart/form-data')
    assert b"Only .eml and .txt files are supported." in response.data
    assert b"data-verdict" not in response.data


def test_checker_failure_shows_generic_error(client, monkeypatch):
    def failing(*args, **kwargs):
        raise AnalysisError("Analysis timed out")

    monkeypatch.setattr(app_module, 'run_analysis', failing)
    login(client)
    response = client.post('/checker', data={'email_content': 'click here'})
    assert response.status_code == 200
    assert b"An error occurred during analysis" in response.data
    assert b"data-verdict" not in response.data


def test_language_switch_changes_labels(client):
    login(client)
    response = client.get('/language/es?next=/checker')
    assert response.headers['Location'].endswith('/checker')

    response = client.post('/checker', data={'email_content': 'click here'})
    assert 'Sospechoso' in response.get_data(as_text=True)


def test_language_switch_ignores_offsite_next(client):
    response = client.get('/language/es?next=//evil.example/')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/')
    assert 'evil.example' not in response.headers['Location']


def test_language_switch_returns_to_same_host_referrer(client):
    response = client.get('/language/fr', headers={'Referer': 'http://localhost/checker'})
    assert response.headers['Location'].endswith('/checker')


def test_language_switch_ignores_offsite_referrer(client):
    response = client.get('/language/fr', headers={'Referer': 'http://evil.example/phish'})
    assert 'evil.example' not in response.headers['Location']
    assert response.headers['Location'].endswith('/')


def test_create_app_uses_given_config():
    testing_app = create_app(TestingConfig)
    assert testing_app.config['TESTING'] is True
    assert testing_app.config['WTF_CSRF_ENABLED'] is False
    assert testing_app is not app_module.app
    assert not app_module.app.config.get('TESTING')


def test_unknown_language_falls_back_to_english(client):
    client.get('/language/de')
    with client.session_transaction() as sess:
        assert sess['language'] == 'EN'


def test_api_requires_login(client):
    response = client.post('/api/analyze', json={'text': 'hello'})
    assert response.status_code == 401


def test_api_analyze(client):
    login(client)
    response = client.post('/api/analyze', json={'text': 'This is urgent: click here and act now'})
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['verdict'] == 'PHISHING'
    assert data['label'] == 'Phishing'
    assert 'multiple characteristics' in data['explanation']


def test_api_empty_text_is_safe(client):
    login(client)
    data = client.post('/api/analyze', json={'text': ''}).get_json()
    assert data == {
        'verdict': 'SAFE',
        'explanation': 'Email content is empty.',
        'label': 'Safe',
        'icon': '✅',
    }


def test_api_localized_label(client):
    login(client)
    data = client.post('/api/analyze', json={'text': 'click here', 'lang': 'fr'}).get_json()
    assert data['verdict'] == 'SUSPICIOUS'
    assert data['label'] == 'Suspect'


def test_api_missing_text(client):
    login(client)
    assert client.post('/api/analyze', json={}).status_code == 400
    assert client.post('/api/analyze', json={'text': 42}).status_code == 400
    assert client.post('/api/analyze', data='not json').status_code == 400


def test_api_text_too_long(app, client):
    login(client)
    text = 'a' * (app.config['MAX_TEXT_LENGTH'] + 1)
    assert client.post('/api/analyze', json={'text': text}).status_code == 413


def test_api_failure_returns_503(client, monkeypatch):
    def failing(*args, **kwargs):
        raise AnalysisError("Analysis failed")

    monkeypatch.setattr(app_module, 'run_analysis', failing)
    login(client)
    response = client.post('/api/analyze', json={'text': 'click here'})
    assert response.status_code == 503
    assert 'error' in response.get_json()


def test_session_timeout(app, client):
    login(client)
    expired = datetime.now(timezone.utc) - timedelta(minutes=app.config['SESSION_TIMEOUT_MINUTES'] + 1)
    with client.session_transaction() as sess:
        sess['last_activity'] = expired.isoformat()

    response = client.get('/checker')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']
    assert client.get('/checker').status_code == 302


def test_validate_credentials():
    from auth import validate_credentials

    assert validate_credentials('alice@example.com', 'secret') == []
    assert len(validate_credentials('alice', 'short')) == 2
    assert validate_credentials('', 'secret123') == ["Valid email required"]
