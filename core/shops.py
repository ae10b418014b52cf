# core/shops.py

import json
from datetime import datetime, timezone
from pathlib import Path

from core import config
from core.Logger import AppLogger
from core.encryption import is_enabled as encryption_enabled, encrypt_token, decrypt_token


class Shops:
    """
    Token table backed by a flat JSON file, keyed by normalized shop domain:

        {"shop.myshopify.com": {"access_token": "...", "installed_at": "..."}}

    The whole file is read on every call and rewritten on every mutation.
    There is no locking; concurrent writers can lose updates (last writer wins).
    """

    def __init__(self, path: str | Path = None, logger: AppLogger = None):
        self._path = Path(path) if path else None
        self.logger = logger or AppLogger()

    @property
    def path(self) -> Path:
        return self._path or Path(config.SHOPS_FILE)

    def log_action(self, event: str, level: str = "info", data: dict = None, store: str = None):
        self.logger.log(
            event=event,
            level=level,
            store=store,
            data=data or {}
        )

    def _read(self) -> dict:
        if not self.path.exists():
            return {}

        try:
            shops = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.log_action("shops_file_read_failed", "error", {
                "path": str(self.path),
                "error": str(e)
            })
            return {}

        if not isinstance(shops, dict):
            self.log_action("shops_file_malformed", "error", {
                "path": str(self.path),
                "message": "⚠️ Expected a JSON object, ignoring contents."
            })
            return {}

        return shops

    def _write(self, shops: dict) -> bool:
        try:
            self.path.write_text(json.dumps(shops, indent=2), encoding="utf-8")
            return True
        except (OSError, TypeError) as e:
            self.log_action("shops_file_write_failed", "error", {
                "path": str(self.path),
                "error": str(e)
            })
            return False

    def save_token(self, shop_domain: str, access_token: str) -> bool:
        shops = self._read()
        stored = encrypt_token(access_token) if encryption_enabled() else access_token
        shops[shop_domain] = {
            "access_token": stored,
            "installed_at": datetime.now(timezone.utc).isoformat()
        }

        saved = self._write(shops)
        if saved:
            self.log_action("access_token_saved", "success", {
                "message": "🔐 Access token saved.",
                "encrypted": encryption_enabled()
            }, store=shop_domain)
        return saved

    def get_record(self, shop_domain: str) -> dict | None:
        return self._read().get(shop_domain)

    def get_token(self, shop_domain: str) -> str | None:
        record = self.get_record(shop_domain)
        if not isinstance(record, dict):
            return None

        token = record.get("access_token")
        if not token:
            return None

        if encryption_enabled():
            decrypted = decrypt_token(token)
            if decrypted is None:
                self.log_action("access_token_decrypt_failed", "error", {
                    "message": "❌ Stored token could not be decrypted with ENCRYPTION_SECRET."
                }, store=shop_domain)
            return decrypted

        return token

    def is_authenticated(self, shop_domain: str) -> bool:
        return self.get_token(shop_domain) is not None

    def remove_shop(self, shop_domain: str) -> bool:
        shops = self._read()
        if shop_domain not in shops:
            self.log_action("shop_delete_not_found", "warning", {
                "message": "⚠️ Attempted to delete a shop that doesn't exist."
            }, store=shop_domain)
            return False

        del shops[shop_domain]
        removed = self._write(shops)
        if removed:
            self.log_action("shop_deleted", "warning", {
                "message": "🗑️ Shop token removed."
            }, store=shop_domain)
        return removed

    def get_all_shops(self) -> list[str]:
        return list(self._read().keys())
