from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from ..core.exceptions import ConfigurationError


@dataclass
class FirestoreConfig:
    service_account_json: str = ""
    service_account_path: str = ""

    def credential_source(self) -> Any:
        if self.service_account_json:
            try:
                return json.loads(self.service_account_json)
            except ValueError as e:
                raise ConfigurationError(f"FIREBASE_SERVICE_ACCOUNT is not valid JSON: {e}") from e
        if self.service_account_path:
            return self.service_account_path
        raise ConfigurationError("FIREBASE_SERVICE_ACCOUNT is not set")


class FirestoreConnection:
    """Singleton-like Firestore client factory.

    Note: The firebase-admin app is initialized once per process; clients are cheap to fetch.
    """

    _instance: Optional["FirestoreConnection"] = None

    def __init__(self, config: FirestoreConfig):
        self._config = config
        self._client = None

    @classmethod
    def get_instance(cls, config: FirestoreConfig) -> "FirestoreConnection":
        if cls._instance is None:
            cls._instance = FirestoreConnection(config)
        return cls._instance

    def client(self):
        if self._client is None:
            if not firebase_admin._apps:
                cred = credentials.Certificate(self._config.credential_source())
                firebase_admin.initialize_app(cred)
            self._client = firestore.client()
        return self._client

    def collection(self, name: str):
        return self.client().collection(name)
