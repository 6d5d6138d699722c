"""Content package - holds notification payloads and their sources.

``ContentResolver`` lives in ``socialproof.content.resolver``; it depends on
the settings package, which itself imports the payload model from here.
"""

from socialproof.content.generator import MessageGenerator, fill_template
from socialproof.content.models import NotificationPayload
from socialproof.content.remote import HttpTransport, RemotePayload, Transport

__all__ = [
    "HttpTransport",
    "MessageGenerator",
    "NotificationPayload",
    "RemotePayload",
    "Transport",
    "fill_template",
]
