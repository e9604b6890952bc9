"""Age encryption for API keys stored in the config file."""

import base64
from pathlib import Path

import pyrage

AGE_PREFIX = "AGE:"
IDENTITY_NAME = ".age-identity"


def _identity_file(config_dir: Path | None = None) -> Path:
    if config_dir is None:
        config_dir = Path.home() / ".config" / "rscloud"
    return config_dir / IDENTITY_NAME


def _ensure_keypair(
    config_dir: Path | None = None,
) -> tuple[pyrage.x25519.Identity, pyrage.x25519.Recipient]:
    """Load or generate the age keypair kept next to the config file."""
    identity_file = _identity_file(config_dir)
    if identity_file.exists():
        identity = pyrage.x25519.Identity.from_str(identity_file.read_text().strip())
    else:
        identity_file.parent.mkdir(parents=True, exist_ok=True)
        identity = pyrage.x25519.Identity.generate()
        identity_file.write_text(str(identity))
        identity_file.chmod(0o600)
    return identity, identity.to_public()


def encrypt(value: str, config_dir: Path | None = None) -> str:
    """Encrypt a plaintext value. Returns AGE:base64... string."""
    if value.startswith(AGE_PREFIX):
        return value
    _, recipient = _ensure_keypair(config_dir)
    encrypted = pyrage.encrypt(value.encode(), [recipient])
    return AGE_PREFIX + base64.b64encode(encrypted).decode()


def decrypt(value: str, config_dir: Path | None = None) -> str:
    """Decrypt an AGE:-prefixed value. Returns plaintext."""
    if not value.startswith(AGE_PREFIX):
        return value
    identity, _ = _ensure_keypair(config_dir)
    raw = base64.b64decode(value[len(AGE_PREFIX):])
    return pyrage.decrypt(raw, [identity]).decode()


def is_encrypted(value: str) -> bool:
    """Check if a value is age-encrypted."""
    return value.startswith(AGE_PREFIX)
