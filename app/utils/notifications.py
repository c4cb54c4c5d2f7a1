import logging
import firebase_admin
from firebase_admin import credentials, messaging
from app.models.user import User

logger = logging.getLogger(__name__)


def _firebase_app():
    """Return the default Firebase app, initialising it from the service-account file once."""
    import app.config as _cfg
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app(credentials.Certificate(_cfg.FIREBASE_CREDENTIALS))


def send_task_notification(token: str, title: str, body: str) -> bool:
    """Push a notification to a single device token.

    Returns False when no Firebase credentials are configured. Errors raised
    by the messaging client propagate to the caller.
    """
    # config is looked up per call so the credentials path can be changed at runtime
    import app.config as _cfg
    if not _cfg.FIREBASE_CREDENTIALS:
        logger.info("Push notifications disabled; skipping '%s'", title)
        return False

    message = messaging.Message(
        token=token,
        notification=messaging.Notification(title=title, body=body),
    )
    message_id = messaging.send(message, app=_firebase_app())
    logger.debug("Notification %s sent", message_id)
    return True


def notify_task_assigned(user: User | None, task_title: str) -> None:
    """Tell the assignee about a new task. Failures are logged, never raised."""
    if user is None or not user.fcm_token:
        return
    try:
        send_task_notification(
            user.fcm_token,
            "New Task Assigned",
            f"You have been assigned a new task: {task_title}",
        )
    except Exception:
        logger.exception("Error sending notification to user %s", user.id)
