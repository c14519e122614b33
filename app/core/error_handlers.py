from flask import render_template, jsonify, request
from werkzeug.exceptions import HTTPException


class ApiError(Exception):
    """Base exception for API errors"""
    def __init__(self, message, status_code=400, payload=None):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(self.message)

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['status'] = 'error'
        rv['message'] = self.message
        rv['code'] = self.status_code
        return rv


def request_wants_json():
    """Check if the request is expecting JSON"""
    best = request.accept_mimetypes.best_match(['application/json', 'text/html'])
    return (best == 'application/json' or
            request.is_json or
            'application/json' in request.headers.get('Accept', ''))


def register_handlers(app):
    """Register error handlers with the Flask app"""

    messages = {
        400: 'Bad request',
        403: 'Access forbidden',
        404: 'Resource not found',
        500: 'Internal server error',
    }

    @app.errorhandler(HTTPException)
    def http_error(error):
        """Render HTTP errors as JSON or as the error page"""
        code = error.code or 500
        message = messages.get(code, error.name)
        if code >= 500:
            app.logger.error(f'Server Error: {error}')
        if request_wants_json():
            return jsonify({
                'status': 'error',
                'message': message,
                'code': code
            }), code
        return render_template('errors/error.html', code=code, message=message), code

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        """Handle custom API errors"""
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response
