from flask import current_app, jsonify
from spmi.domain.exceptions import CycleError, NotFoundError, ValidationError
from spmi.normalizers.content import normalize_violations


def _error_response(error, status_code, **extra):
    current_app.logger.warning("%s: %s", type(error).__name__, error)
    response = jsonify({
        "error": type(error).__name__,
        "message": str(error),
        **extra,
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return _error_response(error, 400, violations=normalize_violations(error.violations))

    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        return _error_response(error, 404)

    @app.errorhandler(CycleError)
    def handle_cycle(error):
        return _error_response(error, 409)
