from flask import Flask, request, send_file, jsonify
import io
import os
import re
from flask_cors import CORS

from signbraille import (
    BRAILLE_PROFILES,
    DEFAULT_PROFILE_ID,
    EngineHandle,
    LouTranslateEngine,
    NormalizationOptions,
    SvgLayout,
    compliance_check,
    decide_grade,
    decode_braille,
    export_svg,
    get_profile,
    normalize_input,
    profile_for_grade,
    render_braille_svg,
    run_assist,
    translate_text,
)
from signbraille.flag_docs import COMPLIANCE_DOCUMENTATION
from signbraille.normalization import option_flag
from signbraille.svg import build_export_metadata

app = Flask(__name__)

allowed_origins = [
    origin.strip()
    for origin in os.environ.get('SIGNBRAILLE_ALLOWED_ORIGINS', '').split(',')
    if origin.strip()
]
# For development, allow localhost
if os.environ.get('FLASK_ENV') == 'development':
    allowed_origins.extend(['http://localhost:3000', 'http://127.0.0.1:3000', 'http://localhost:5001'])
CORS(app, origins=allowed_origins or '*')

app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('SIGNBRAILLE_MAX_CONTENT_LENGTH', 1 * 1024 * 1024))  # 1MB

ENGINE_TIMEOUT = float(os.environ.get('SIGNBRAILLE_ENGINE_TIMEOUT', 10.0))  # seconds
MAX_TEXT_LENGTH = 2000  # characters per request


def _make_engine():
    return LouTranslateEngine(
        executable=os.environ.get('LOU_TRANSLATE'),
        table_path=os.environ.get('LOUIS_TABLEPATH'),
        timeout=ENGINE_TIMEOUT,
    )


# Single owned handle; reset() after an engine abort rebuilds it on next use
engine_handle = EngineHandle(_make_engine)


@app.after_request
def add_security_headers(response):
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'DENY'
    return response


@app.errorhandler(413)
def request_entity_too_large(error):
    return jsonify({'error': 'Request too large'}), 413


def _get_json():
    if not request.is_json:
        raise ValueError('Content-Type must be application/json')
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError('No JSON data provided')
    return data


def _get_text(data):
    text = data.get('text', '')
    if not isinstance(text, str):
        raise ValueError('text must be a string')
    if len(text) > MAX_TEXT_LENGTH:
        raise ValueError(f'text exceeds {MAX_TEXT_LENGTH} characters')
    return text


def _get_profile_id(data):
    profile_id = str(data.get('profile_id', DEFAULT_PROFILE_ID)).strip().lower()
    if profile_id not in [p.id for p in BRAILLE_PROFILES]:
        raise ValueError(f'Invalid profile_id. Must be one of {[p.id for p in BRAILLE_PROFILES]}')
    return profile_id


def _coerce_braille_lines(data):
    """Accept braille Unicode as a string or a list of line strings."""
    lines = data.get('braille_lines', data.get('unicode_braille'))
    if isinstance(lines, str):
        return lines
    if not isinstance(lines, list):
        raise ValueError('Provide braille Unicode under "unicode_braille" or "braille_lines"')
    for idx, line in enumerate(lines):
        if not isinstance(line, str):
            raise ValueError(f'Line {idx+1} is not a string')
    return '\n'.join(lines)


def _assess(data):
    """Shared request handling for /translate and /export_svg."""
    text = _get_text(data)
    options = NormalizationOptions.from_dict(data.get('options'))
    layout = SvgLayout.from_dict(data.get('layout'))
    smart_select = option_flag(data, 'smart_select', False)

    decision = decide_grade(text) if smart_select else None
    if decision is not None:
        profile = profile_for_grade(decision.grade)
    else:
        profile = get_profile(_get_profile_id(data))

    report = compliance_check(text, profile.id, smart_select, decision)
    return text, options, layout, decision, profile, report


@app.route('/health')
def health_check():
    return jsonify({'status': 'ok', 'message': 'Signage braille backend is running'})


@app.route('/profiles')
def list_profiles():
    return jsonify({
        'profiles': [p.to_dict() for p in BRAILLE_PROFILES],
        'default_profile_id': DEFAULT_PROFILE_ID,
    })


@app.route('/compliance/docs')
def compliance_docs():
    return jsonify({'documentation': COMPLIANCE_DOCUMENTATION})


@app.route('/normalize', methods=['POST'])
def normalize():
    try:
        data = _get_json()
        text = _get_text(data)
        options = NormalizationOptions.from_dict(data.get('options'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(normalize_input(text, options).to_dict())


@app.route('/grade', methods=['POST'])
def grade():
    try:
        text = _get_text(_get_json())
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(decide_grade(text).to_dict())


@app.route('/compliance', methods=['POST'])
def compliance():
    try:
        data = _get_json()
        text = _get_text(data)
        profile_id = _get_profile_id(data)
        smart_select = option_flag(data, 'smart_select', False)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    decision = decide_grade(text) if smart_select else None
    report = compliance_check(text, profile_id, smart_select, decision)
    return jsonify(report.to_dict())


@app.route('/assist', methods=['POST'])
def assist():
    try:
        data = _get_json()
        text = _get_text(data)
        profile_id = _get_profile_id(data)
        options = NormalizationOptions.from_dict(data.get('options'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(run_assist(text, normalize_input(text, options), profile_id).to_dict())


@app.route('/translate', methods=['POST'])
def translate():
    try:
        data = _get_json()
        text, options, layout, decision, profile, report = _assess(data)
        include_svg = option_flag(data, 'include_svg', False)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    app.logger.info(
        f"Request /translate → profile={profile.id}, smart_select={decision is not None}, "
        f"compliance={report.level}, lines={text.count(chr(10)) + 1}"
    )

    try:
        result = translate_text(text, profile, engine_handle, options)
    except Exception as e:
        app.logger.error(f"Translation error: {e}")
        return jsonify({'error': f'Failed to translate: {str(e)}'}), 500

    payload = {
        'translation': result.to_dict(),
        'compliance': report.to_dict(),
        'grade_decision': decision.to_dict() if decision else None,
    }
    if include_svg:
        payload['svg'] = render_braille_svg(result.lines, layout).to_dict()
    return jsonify(payload)


@app.route('/render_svg', methods=['POST'])
def render_svg():
    try:
        data = _get_json()
        braille = _coerce_braille_lines(data)
        layout = SvgLayout.from_dict(data.get('layout'))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    decoded = decode_braille(braille)
    document = render_braille_svg(decoded.lines, layout)
    payload = document.to_dict()
    payload['plain_dots'] = decoded.plain_dots
    payload['warnings'] = [w.to_dict() for w in decoded.warnings]
    return jsonify(payload)


@app.route('/export_svg', methods=['POST'])
def export_svg_file():
    """Download the SVG preview; BLOCK-level text needs an explicit acknowledgement."""
    try:
        data = _get_json()
        text, options, layout, decision, profile, report = _assess(data)
        acknowledged = option_flag(data, 'acknowledged', False)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    if report.blocked and not acknowledged:
        return jsonify({
            'error': 'Compliance level BLOCK; acknowledge the flagged risks to export',
            'compliance': report.to_dict(),
        }), 409

    try:
        result = translate_text(text, profile, engine_handle, options)
        document = render_braille_svg(result.lines, layout)
        metadata = build_export_metadata(text, profile.id, report, acknowledged)
        svg_text = export_svg(document, metadata)
    except Exception as e:
        app.logger.error(f"SVG export error: {e}")
        return jsonify({'error': f'Failed to export SVG: {str(e)}'}), 500

    # Create filename based on text content with fallback
    filename = 'braille-preview'
    first_line = next((line.strip() for line in text.split('\n') if line.strip()), '')
    sanitized = re.sub(r'[^\w\s-]', '', first_line[:30], flags=re.ASCII)
    sanitized = re.sub(r'[-\s]+', '_', sanitized).strip('_')
    if sanitized:
        filename = f'braille-preview_{sanitized}'

    svg_io = io.BytesIO(svg_text.encode('utf-8'))
    return send_file(svg_io, mimetype='image/svg+xml', as_attachment=True, download_name=f'{filename}.svg')


if __name__ == '__main__':
    app.run(debug=True, port=5001)
