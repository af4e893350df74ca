"""Mini README: HTTP-flavoured status lines for console output.

``format_status`` renders an ``OperationResult`` as ``"<code> <phrase> - <message>"``
so operators see one consistent shape for successes and failures alike.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..common import OperationResult, ResultCode

_STATUS_BY_CODE = {
    ResultCode.VALIDATION: (400, "Bad Request"),
    ResultCode.NOT_FOUND: (404, "Not Found"),
    ResultCode.DUPLICATE_KEY: (409, "Conflict"),
}


def status_for(result: OperationResult[object]) -> Tuple[int, str]:
    if result.success:
        return 200, "OK"
    return _STATUS_BY_CODE.get(result.code, (500, "Error"))


def format_status(result: OperationResult[object], message: Optional[str] = None) -> str:
    """Format ``result``; ``message`` replaces the default text when given."""

    code, phrase = status_for(result)
    if message is None:
        message = "Success" if result.success else (result.error or phrase)
    return f"{code} {phrase} - {message}"
