"""Phishguard - Main Flask Application"""
import logging
import os
from datetime import datetime, timedelta, timezone
from urllib.parse import urlsplit

from flask import (Flask, current_app, render_template, request, jsonify, redirect,
                   url_for, flash, session)
from flask_login import LoginManager, login_required, current_user, logout_user
from flask_wtf.csrf import CSRFProtect

from config import Config
from models import User
from auth import auth_bp
from detection.service import AnalysisError, run_analysis
from i18n import LANGUAGES, get_text, normalize_language, verdict_display

csrf = CSRFProtect()
login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message_category = 'warning'


def configure_logging(flask_app):
    level = getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    flask_app.logger.setLevel(level)


@login_manager.user_loader
def load_user(user_id):
    return User(user_id) if user_id else None


@login_manager.unauthorized_handler
def unauthorized():
    if request.path.startswith('/api/'):
        return jsonify({'error': 'Authentication required'}), 401
    flash('Please log in to access this page.', 'warning')
    return redirect(url_for('auth.login', next=request.path))


def check_session_timeout():
    """Log out users after a period of inactivity."""
    if current_user.is_authenticated:
        now = datetime.now(timezone.utc)
        last_activity = session.get('last_activity')
        if last_activity:
            elapsed = now - datetime.fromisoformat(last_activity)
            if elapsed > timedelta(minutes=current_app.config['SESSION_TIMEOUT_MINUTES']):
                logout_user()
                session.pop('last_activity', None)
                flash('Session expired due to inactivity.', 'warning')
                return redirect(url_for('auth.login'))
        session['last_activity'] = now.isoformat()


def current_language():
    return normalize_language(session.get('language', current_app.config['DEFAULT_LANGUAGE']))


def inject_language():
    language = current_language()
    return {
        'language': language,
        'languages': LANGUAGES,
        'text': get_text(language),
    }


def _analyze(text):
    config = current_app.config
    return run_analysis(
        text,
        timeout=config['ANALYSIS_TIMEOUT'],
        delay_range=(config['ANALYSIS_DELAY_MIN'], config['ANALYSIS_DELAY_MAX']),
    )


def _read_upload(file):
    """Decode an uploaded .txt/.eml file, or return None if the type is not allowed."""
    if not file.filename.lower().endswith(current_app.config['ALLOWED_UPLOAD_EXTENSIONS']):
        return None
    return file.read().decode('utf-8', errors='ignore')


def _local_path(target):
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


def _same_host_referrer():
    referrer = request.referrer
    if not referrer:
        return None
    parts = urlsplit(referrer)
    if parts.netloc != request.host:
        return None
    path = parts.path or '/'
    return f'{path}?{parts.query}' if parts.query else path


def index():
    if current_user.is_authenticated:
        return redirect(url_for('checker'))
    return redirect(url_for('auth.login'))


@login_required
def checker():
    text = get_text(current_language())
    result = None
    display = None
    email_content = ''

    if request.method == 'POST':
        email_content = request.form.get('email_content', '')

        file = request.files.get('email_file')
        if file and file.filename:
            content = _read_upload(file)
            if content is None:
                flash(text['invalidFile'], 'danger')
                return render_template('checker.html', result=None, email_content=email_content)
            if content.strip():
                email_content = content

        if not email_content.strip():
            flash(text['emptyInput'], 'warning')
            return render_template('checker.html', result=None, email_content=email_content)

        try:
            result = _analyze(email_content)
        except AnalysisError:
            flash(text['error'], 'danger')
        else:
            display = verdict_display(result.verdict, current_language())

    return render_template('checker.html', result=result, display=display,
                           email_content=email_content)


@csrf.exempt
@login_required
def api_analyze():
    """JSON API endpoint for analysis."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('text'), str):
        return jsonify({'error': 'No text provided'}), 400

    email_text = data['text']
    max_length = current_app.config['MAX_TEXT_LENGTH']
    if len(email_text) > max_length:
        return jsonify({'error': f'Text too long (max {max_length} characters)'}), 413

    language = normalize_language(data.get('lang') or current_language())

    try:
        result = _analyze(email_text)
    except AnalysisError:
        return jsonify({'error': get_text(language)['error']}), 503

    display = verdict_display(result.verdict, language)
    payload = result.to_dict()
    payload.update({'label': display['label'], 'icon': display['icon']})
    return jsonify(payload)


def set_language(code):
    """Store the display language, then go back to a local `next` path or a same-host referrer."""
    session['language'] = normalize_language(code)
    target = _local_path(request.args.get('next')) or _same_host_referrer()
    return redirect(target or url_for('index'))


def payload_too_large(error):
    if request.path.startswith('/api/'):
        return jsonify({'error': 'Upload too large'}), 413
    flash('The uploaded file is too large.', 'danger')
    return redirect(url_for('checker'))


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    csrf.init_app(app)
    login_manager.init_app(app)
    app.register_blueprint(auth_bp)

    app.before_request(check_session_timeout)
    app.context_processor(inject_language)
    app.register_error_handler(413, payload_too_large)

    app.add_url_rule('/', view_func=index)
    app.add_url_rule('/checker', view_func=checker, methods=['GET', 'POST'])
    app.add_url_rule('/api/analyze', view_func=api_analyze, methods=['POST'])
    app.add_url_rule('/language/<code>', view_func=set_language)

    return app


app = create_app()


if __name__ == '__main__':
    debug_mode = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    app.run(debug=debug_mode, host='0.0.0.0', port=5000)
