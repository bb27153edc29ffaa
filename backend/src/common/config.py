import os
from typing import Final

MOTION_TABLE: Final[str] = os.environ["MOTION_TABLE"]
TEMPERATURES_TABLE: Final[str] = os.environ["TEMPERATURES_TABLE"]
DEVICE_TOKENS_TABLE: Final[str] = os.environ["DEVICE_TOKENS_TABLE"]
FIREBASE_CREDENTIALS_SECRET_NAME: Final[str] = os.environ.get(
    "FIREBASE_CREDENTIALS_SECRET_NAME", "firebase/credentials"
)

MAX_MOTION_DAYS: Final[int] = 7
HOURLY_SLOTS: Final[int] = 24
TEMPERATURES_DOC_ID: Final[str] = "values"
