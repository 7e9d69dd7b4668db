import logging
from functools import wraps

from flask import request, Response, g, current_app
from werkzeug.security import check_password_hash

logger = logging.getLogger(__name__)


def check_auth(username, password):
    """Return the matching account if the username/password combination is valid"""
    repository = current_app.extensions['record_repository']
    account = repository.get_account_by_username(username)
    if account and check_password_hash(account.password_hash, password):
        return account
    return None

def authenticate():
    """Send 401 response that enables basic auth"""
    return Response(
        'Could not verify your access level for that URL.\n'
        'You have to login with proper credentials', 401,
        {'WWW-Authenticate': 'Basic realm="School Dashboard"'})

def forbidden():
    return Response('Administrator access required', 403)

def requires_auth(f):
    """Decorator that requires authentication; the account is stored on g.account"""
    @wraps(f)
    def decorated(*args, **kwargs):
        auth = request.authorization
        account = check_auth(auth.username, auth.password) if auth else None
        if account is None:
            return authenticate()
        g.account = account
        return f(*args, **kwargs)
    return decorated

def requires_admin(f):
    """Decorator that requires an authenticated admin account"""
    @wraps(f)
    @requires_auth
    def decorated(*args, **kwargs):
        if not g.account.is_admin:
            logger.warning(f"Account '{g.account.username}' denied admin access to {request.path}")
            return forbidden()
        return f(*args, **kwargs)
    return decorated
