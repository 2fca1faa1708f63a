"""Mail namespaces of a user, resolved from the configured storage layout."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from mailquota.config import NamespaceConfig, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailNamespace:
    """Storage locations of one namespace for one user."""
    prefix: str
    root_dir: str | None
    inbox_path: str | None
    mailbox_file: bool = False


class NamespaceResolver:
    """Expands namespace templates into per-user ``MailNamespace`` objects."""

    def __init__(self, namespaces: list[NamespaceConfig] | None = None):
        self._namespaces = list(namespaces if namespaces is not None else settings.namespaces)

    def resolve(self, user: str) -> list[MailNamespace]:
        if not user or "/" in user or user in (".", ".."):
            raise ValueError(f"Invalid user name: {user!r}")

        resolved = []
        for ns in self._namespaces:
            resolved.append(
                MailNamespace(
                    prefix=ns.prefix,
                    root_dir=self._expand(ns.root_dir, user),
                    inbox_path=self._expand(ns.inbox_path, user),
                    mailbox_file=ns.mailbox_file,
                )
            )
        logger.debug("Resolved %d namespaces for %s", len(resolved), user)
        return resolved

    @staticmethod
    def _expand(template: str | None, user: str) -> str | None:
        if not template:
            return None
        path = os.path.expanduser(template.replace("{user}", user))
        return os.path.normpath(path)
