"""Turns one gateway request into one filesystem operation.

GET /foo/bar/blah
- send blah back to the client

POST /foo/bar/blah with no "action" parameter
- also sends blah back to the client (defeats caching)

POST /foo/bar/blah with "action=save" and a "file" upload
- create or overwrite blah with the upload; create /foo/bar if needed

POST /foo/bar/blah with "action=append" and a "file" upload
- append the upload to blah, creating it if needed

POST /foo/bar/blah with "action=touch"
- create an empty blah or update its timestamp; create /foo/bar if needed

POST /foo/bar/blah with "action=makedir"
- create the directory blah and any missing parents

POST /foo/bar/blah with "action=remove"
- delete the file or directory blah; fails if the directory is not empty
"""

from .guards import check_modifiable, check_readable, check_removable, then
from .logging_setup import core_logger
from .models import Action, Failure, GatewayRequest, OperationOutcome
from .operations import (
    append_file,
    make_directory,
    remove_path,
    save_file,
    send_file,
    touch_file,
)
from .paths import decode, sanitize

_LOG = core_logger()


def _error_text(exc: Exception) -> str:
    # strerror omits the absolute filename that str(OSError) carries
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def _run(
    action: Action, request: GatewayRequest, client_path: str, root: str, strict: bool
) -> OperationOutcome:
    sanitized = sanitize(request.path, root, strict=strict)

    if action is Action.SEND:
        return then(then(sanitized, lambda p: check_readable(p, client_path)), send_file)
    if action is Action.REMOVE:
        return then(then(sanitized, lambda p: check_removable(p, client_path)), remove_path)

    modifiable = then(sanitized, lambda p: check_modifiable(p, client_path))
    if action is Action.SAVE:
        return then(modifiable, lambda p: save_file(p, request.upload))
    if action is Action.APPEND:
        return then(modifiable, lambda p: append_file(p, request.upload))
    if action is Action.TOUCH:
        return then(modifiable, lambda p: touch_file(p, client_path))
    return then(modifiable, lambda p: make_directory(p, client_path))


def dispatch(request: GatewayRequest, root: str, strict: bool = False) -> OperationOutcome:
    """
    Run one request against ``root``. ``request.path`` is percent-encoded
    and is decoded exactly once; messages use that decoded form.
    """
    client_path = decode(request.path)
    action = Action.parse(request.action)
    if action is None:
        _LOG.info("unknown action %r for %s", request.action, client_path)
        return Failure.forbidden(f"Unknown action {request.action}")

    try:
        outcome = _run(action, request, client_path, root, strict)
    except Exception as e:
        _LOG.warning("%s %s failed: %s", action.verb, client_path, e)
        return Failure.forbidden(f"Cannot {action.verb} {client_path} due to {_error_text(e)}")

    if isinstance(outcome, Failure):
        _LOG.info("%s %s refused: %s", action.verb, client_path, outcome.message)
    return outcome
