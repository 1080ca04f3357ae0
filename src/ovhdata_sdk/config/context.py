"""
User context: credentials and selected service name per configuration

The context is stored in ~/.config/ovhdata-cli/context.json. The file holds
secrets, so it is created readable by its owner only. When the
`use_keyring` feature is on, application secrets go to the OS keyring
instead of the file.
"""

import json
import logging
import os
import platform
import stat
import uuid
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..exceptions import ConfigError
from .settings import CLI_NAME, config_dir

logger = logging.getLogger(__name__)

CONTEXT_FILE_NAME = "context.json"
CONTEXT_FILE_PERMISSIONS = 0o600  # Owner read/write only
KEYRING_SERVICE_NAME = CLI_NAME
HIDDEN_SECRET = "[hidden_secret]"


def default_context_path() -> Path:
    return config_dir() / CONTEXT_FILE_NAME


@dataclass
class StoredCredentials:
    """
    Credentials saved for one configuration

    Attributes:
        application_key: OVH application key
        application_secret: OVH application secret, None when kept in the keyring
        consumer_key: OVH consumer key
    """
    application_key: Optional[str] = None
    application_secret: Optional[str] = None
    consumer_key: Optional[str] = None

    def __repr__(self) -> str:
        return f"StoredCredentials(application_key='{self.application_key}', application_secret='{HIDDEN_SECRET}')"

    @property
    def complete(self) -> bool:
        return bool(self.application_key and self.application_secret and self.consumer_key)

    def hide_secrets(self) -> 'StoredCredentials':
        """Copy with the application secret replaced by a placeholder."""
        return replace(self, application_secret=HIDDEN_SECRET)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'application_key': self.application_key,
            'application_secret': self.application_secret,
            'consumer_key': self.consumer_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StoredCredentials':
        return cls(
            application_key=data.get('application_key'),
            application_secret=data.get('application_secret'),
            consumer_key=data.get('consumer_key'),
        )


@dataclass
class Features:
    """Feature flags saved in the context"""
    auto_upgrade: bool = True
    confirm_before_upgrade: bool = True
    app_beta_banner: bool = True
    use_keyring: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'auto_upgrade': self.auto_upgrade,
            'confirm_before_upgrade': self.confirm_before_upgrade,
            'app_beta_banner': self.app_beta_banner,
            'use_keyring': self.use_keyring,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Features':
        return cls(**{key: bool(value) for key, value in data.items() if key in cls.__dataclass_fields__})


@dataclass
class Context:
    """
    Per-user state of the command-line tool

    Attributes:
        uuid: Identifies this context; the session log files are grouped under it
        ovhapi_credentials: Credentials by configuration name
        service_names: Selected cloud project by configuration name
        features: Feature flags
        path: File the context is saved to
    """
    uuid: str = field(default_factory=lambda: str(uuid.uuid4()))
    ovhapi_credentials: Dict[str, StoredCredentials] = field(default_factory=dict)
    service_names: Dict[str, str] = field(default_factory=dict)
    features: Features = field(default_factory=Features)
    path: Optional[Path] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Context':
        return cls(
            uuid=data.get('uuid') or str(uuid.uuid4()),
            ovhapi_credentials={
                name: StoredCredentials.from_dict(value)
                for name, value in (data.get('ovhapi_credentials') or {}).items()
            },
            service_names=dict(data.get('service_names') or {}),
            features=Features.from_dict(data.get('features') or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {'uuid': self.uuid, 'features': self.features.to_dict()}
        if self.ovhapi_credentials:
            result['ovhapi_credentials'] = {
                name: creds.to_dict() for name, creds in self.ovhapi_credentials.items()
            }
        if self.service_names:
            result['service_names'] = dict(self.service_names)
        return result

    @classmethod
    def load(cls, file_path: Optional[Union[str, Path]] = None) -> 'Context':
        """
        Load the context, creating the file when it does not exist yet.

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        path = Path(file_path) if file_path else default_context_path()
        created = _ensure_context_file(path)

        if created:
            context = cls(path=path)
            context.save()
            return context

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
            data = json.loads(content) if content.strip() else {}
        except OSError as e:
            raise ConfigError(f"Failed to read context file: {e}", "FILE_ERROR")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse context file {path}: {e}", "PARSE_ERROR")

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid context file format: {path}", "INVALID_FORMAT")

        context = cls.from_dict(data)
        context.path = path
        if context.features.use_keyring:
            context._restore_secrets()
        if not data.get('uuid'):
            context.save()
        return context

    def save(self) -> None:
        """
        Save the context to its file, keeping owner-only permissions.

        Raises:
            ConfigError: If the file cannot be written
        """
        path = self.path or default_context_path()
        _ensure_context_file(path)

        data = self.to_dict()
        if self.features.use_keyring:
            self._store_secrets(data)

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise ConfigError(f"Unable to save context into file {path}: {e}", "SAVE_CONTEXT_ERROR")
        logger.debug(f"Context saved to {path}")

    # Credentials and service names, by configuration name

    def get_credentials(self, config_name: str) -> Optional[StoredCredentials]:
        return self.ovhapi_credentials.get(config_name)

    def set_credentials(self, config_name: str, credentials: StoredCredentials) -> None:
        self.ovhapi_credentials[config_name] = credentials

    def get_service_name(self, config_name: str) -> Optional[str]:
        return self.service_names.get(config_name)

    def set_service_name(self, config_name: str, service_name: str) -> None:
        self.service_names[config_name] = service_name

    def logout(self, config_name: str) -> None:
        """Forget the credentials and service name of a configuration."""
        credentials = self.ovhapi_credentials.pop(config_name, None)
        self.service_names.pop(config_name, None)
        if credentials is not None and self.features.use_keyring:
            _delete_keyring_secret(config_name)

    def hide_secrets(self) -> 'Context':
        """Copy of the context safe to print."""
        return replace(
            self,
            ovhapi_credentials={
                name: creds.hide_secrets() for name, creds in self.ovhapi_credentials.items()
            },
            service_names=dict(self.service_names),
        )

    # Keyring

    def _store_secrets(self, data: Dict[str, Any]) -> None:
        for name, creds in data.get('ovhapi_credentials', {}).items():
            secret = creds.get('application_secret')
            if not secret:
                continue
            try:
                keyring.set_password(KEYRING_SERVICE_NAME, name, secret)
            except KeyringError as e:
                logger.warning(f"Keyring storage failed for config '{name}', keeping secret in file: {e}")
                continue
            creds['application_secret'] = None

    def _restore_secrets(self) -> None:
        for name, creds in self.ovhapi_credentials.items():
            if creds.application_secret:
                continue
            try:
                creds.application_secret = keyring.get_password(KEYRING_SERVICE_NAME, name)
            except KeyringError as e:
                logger.warning(f"Keyring retrieval failed for config '{name}': {e}")


def _delete_keyring_secret(config_name: str) -> None:
    try:
        keyring.delete_password(KEYRING_SERVICE_NAME, config_name)
    except PasswordDeleteError:
        logger.debug(f"No keyring secret to delete for config '{config_name}'")
    except KeyringError as e:
        logger.warning(f"Keyring deletion failed for config '{config_name}': {e}")


def _ensure_context_file(path: Path) -> bool:
    """
    Create the context file with owner-only permissions if it is missing.

    Warns when an existing file is readable by others.

    Returns:
        bool: True if the file was created
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, CONTEXT_FILE_PERMISSIONS)
            os.close(fd)
            if platform.system() != "Windows":
                os.chmod(path, CONTEXT_FILE_PERMISSIONS)
            return True
    except FileExistsError:
        return False
    except OSError as e:
        raise ConfigError(f"Unable to create context file {path}: {e}", "FILE_ERROR")

    if platform.system() != "Windows":
        mode = stat.S_IMODE(path.stat().st_mode)
        if mode != CONTEXT_FILE_PERMISSIONS:
            logger.warning(
                f"{path} file permissions are incorrect for a file that holds sensitive information. "
                f"Please manually run `chmod 600 {path}` (read/write for user only)."
            )
    return False
