import json
from typing import Any

import firebase_admin
from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities import parameters
from firebase_admin import credentials, exceptions, messaging

from .config import FIREBASE_CREDENTIALS_SECRET_NAME
from .errors import ConfigurationError, DeliveryError

logger = Logger()

ANDROID_PRIORITY = "high"


class PushSender:
    """Sends FCM multicast data messages.

    The Firebase app is built on first use from the service-account JSON stored
    in Secrets Manager under ``credentials_secret_name`` and reused afterwards.
    """

    APP_NAME = "ambient-alerts"

    def __init__(self, credentials_secret_name: str = FIREBASE_CREDENTIALS_SECRET_NAME) -> None:
        self.credentials_secret_name = credentials_secret_name
        self._app: firebase_admin.App | None = None

    def _get_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app
        try:
            service_account = json.loads(parameters.get_secret(self.credentials_secret_name))
            cert = credentials.Certificate(service_account)
        except (parameters.GetParameterError, ValueError, TypeError) as exc:
            raise ConfigurationError(f"invalid Firebase credentials in {self.credentials_secret_name}") from exc
        try:
            self._app = firebase_admin.get_app(self.APP_NAME)
        except ValueError:
            self._app = firebase_admin.initialize_app(cert, name=self.APP_NAME)
        return self._app

    def send_multicast(self, data: dict[str, str], tokens: list[str]) -> Any:
        message = messaging.MulticastMessage(
            data=data,
            tokens=tokens,
            android=messaging.AndroidConfig(priority=ANDROID_PRIORITY),
        )
        try:
            return messaging.send_each_for_multicast(message, app=self._get_app())
        except (exceptions.FirebaseError, ValueError) as exc:
            raise DeliveryError(f"multicast delivery failed: {exc}") from exc
