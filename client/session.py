"""
Auth token store: the process-wide credential pair, persisted to the session file.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from core.models.auth import CredentialPair

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Holds the current access/refresh pair.

    Reads are free; writes go through `set_token`/`clear` only, and the
    auth service is the single writer (login and refresh).
    """

    def __init__(self, session_file: Path | None = None) -> None:
        self.session_file = session_file
        self._credentials: CredentialPair | None = None
        self.__load_session()

    def __load_session(self) -> None:
        if not self.session_file or not self.session_file.exists():
            return
        try:
            self._credentials = CredentialPair.model_validate_json(self.session_file.read_text())
        except (OSError, ValidationError) as e:
            logger.warning(f"Discarding unreadable session file {self.session_file}: {e}")
            self._credentials = None
            self.session_file.unlink(missing_ok=True)

    def __save_session(self) -> None:
        if not self.session_file:
            return
        try:
            if self._credentials is None:
                self.session_file.unlink(missing_ok=True)
            else:
                self.session_file.write_text(self._credentials.model_dump_json(by_alias=True))
        except OSError as e:
            # the in-memory pair stays authoritative for this process
            logger.error(f"Could not persist session to {self.session_file}: {e}")

    def get_token(self) -> CredentialPair | None:
        return self._credentials

    @property
    def access_token(self) -> str | None:
        return self._credentials.access_token if self._credentials else None

    @property
    def refresh_token(self) -> str | None:
        return self._credentials.refresh_token if self._credentials else None

    def set_token(self, credentials: CredentialPair) -> None:
        """Replace the stored pair and persist it."""
        self._credentials = credentials
        self.__save_session()

    def clear(self) -> None:
        self._credentials = None
        self.__save_session()
