"""
Credential Store

Loads the AWS shared credentials file, updates the section of a single
profile with freshly assumed credentials and writes the whole file back.
Sections other than the target, and keys other than the three credential
keys, are carried through untouched.
"""

import configparser
import io
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import StoreLoadError, StoreWriteError
from .exchange import TemporaryCredentials

__all__ = [
    'CredentialStore',
    'merge_and_persist',
    'ACCESS_KEY_ID',
    'SECRET_ACCESS_KEY',
    'SESSION_TOKEN',
    'PLACEHOLDER',
]

logger = logging.getLogger(__name__)

ACCESS_KEY_ID = "aws_access_key_id"
SECRET_ACCESS_KEY = "aws_secret_access_key"
SESSION_TOKEN = "aws_session_token"
PLACEHOLDER = "Default"

NEW_FILE_MODE = 0o600
NO_DEFAULT_SECTION = "\x00"


def _new_parser() -> configparser.ConfigParser:
    # Secrets may contain '%', keys must keep their case and [DEFAULT] is a
    # plain profile, so the built-in defaults section gets a name no file can use
    parser = configparser.ConfigParser(interpolation=None, default_section=NO_DEFAULT_SECTION)
    parser.optionxform = str
    return parser


class CredentialStore:
    """
    In-memory copy of the AWS credentials file.
    """

    def __init__(self, path: Path, entries: Optional[Dict[str, Dict[str, str]]] = None):
        """
        Initialize the store.

        Args:
            path: File the store is written back to
            entries: Mapping of profile name to its key/value pairs
        """
        self.path = Path(path)
        self._entries = {name: dict(values) for name, values in (entries or {}).items()}

    @classmethod
    def loads(cls, text: str, path: Path) -> "CredentialStore":
        """
        Parse credentials file contents.

        Raises:
            StoreLoadError: If the text is not a valid credentials file
        """
        parser = _new_parser()
        try:
            parser.read_string(text, source=str(path))
        except configparser.Error as e:
            raise StoreLoadError(f"Could not parse credentials file {path}: {e}") from e

        entries = {section: dict(parser.items(section, raw=True)) for section in parser.sections()}
        return cls(path, entries)

    @classmethod
    def load(cls, path: Path) -> "CredentialStore":
        """
        Read the credentials file at ``path``.

        A missing file gives an empty store; it is created on the first save.

        Raises:
            StoreLoadError: If the file exists but cannot be read or parsed
        """
        path = Path(path)
        if not path.exists():
            logger.info("Credentials file %s does not exist yet", path)
            return cls(path)

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreLoadError(f"Could not read credentials file {path}: {e}") from e

        store = cls.loads(text, path)
        logger.debug("Loaded %d profiles from %s", len(store), path)
        return store

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, profile: str) -> bool:
        return profile in self._entries

    def profiles(self) -> List[str]:
        """Names of all profiles in the store."""
        return list(self._entries)

    def get(self, profile: str) -> Optional[Dict[str, str]]:
        """Return a copy of a profile's entry, or None if it has none."""
        entry = self._entries.get(profile)
        return dict(entry) if entry is not None else None

    def as_dict(self) -> Dict[str, Dict[str, str]]:
        return {name: dict(values) for name, values in self._entries.items()}

    def update(self, profile: str, credentials: TemporaryCredentials) -> None:
        """
        Overwrite the credential keys of one profile.

        A profile without an entry first gets one filled with placeholders.
        """
        entry = self._entries.get(profile)
        if entry is None:
            logger.info("Adding profile '%s' to the credentials file", profile)
            entry = {ACCESS_KEY_ID: PLACEHOLDER, SECRET_ACCESS_KEY: PLACEHOLDER, SESSION_TOKEN: PLACEHOLDER}
            self._entries[profile] = entry

        entry[ACCESS_KEY_ID] = credentials.access_key_id
        entry[SECRET_ACCESS_KEY] = credentials.secret_access_key
        entry[SESSION_TOKEN] = credentials.session_token

    def dumps(self) -> str:
        """Serialize the store in credentials file format."""
        parser = _new_parser()
        for name, values in self._entries.items():
            parser[name] = values

        buffer = io.StringIO()
        parser.write(buffer)
        return buffer.getvalue()

    def save(self) -> None:
        """
        Replace the credentials file with the serialized store.

        The new contents are written to a temporary file next to the target,
        synced to disk and renamed over it, so the file is never half written.

        Raises:
            StoreWriteError: If anything fails; the original file is left as it was
        """
        try:
            content = self.dumps()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            mode = stat.S_IMODE(self.path.stat().st_mode) if self.path.exists() else NEW_FILE_MODE
        except (OSError, configparser.Error, ValueError) as e:
            raise StoreWriteError(
                f"Could not write credentials file {self.path}: {e}. "
                "The newly assumed credentials were not saved"
            ) from e

        temp_path = None
        try:
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".credentials.", suffix=".tmp"
            )
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())

            os.chmod(temp_path, mode)
            os.replace(temp_path, self.path)
        except OSError as e:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise StoreWriteError(
                f"Could not write credentials file {self.path}: {e}. "
                "The newly assumed credentials were not saved"
            ) from e

        logger.debug("Wrote %d profiles to %s", len(self), self.path)


def merge_and_persist(store: CredentialStore, profile: str, credentials: TemporaryCredentials) -> None:
    """
    Put new credentials for ``profile`` into the store and save it.

    Raises:
        StoreWriteError: If the credentials file could not be written
    """
    store.update(profile, credentials)
    store.save()
