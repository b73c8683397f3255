from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import DomainError, NotFoundError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_errors(view):
    """Map domain errors to 4xx JSON; anything else is a 500 with a generic message.

    Business-rule rejections are expected outcomes and are not logged as errors.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except DomainError as e:
            logger.info("%s %s rejected: %s", request.method, request.path, e)
            return json_error(str(e), 400)
        except Exception:
            logger.exception("%s %s failed", request.method, request.path)
            return json_error("Internal server error", 500)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
