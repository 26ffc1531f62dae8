"""Per-invocation state shared by every command."""

from __future__ import annotations

from dataclasses import dataclass

import click

from ims.domain.model.user import UNKNOWN_ACTOR
from ims.infrastructure.bootstrap import Container


@dataclass
class Session:

    container: Container
    user_id: str | None = None
    actor_override: str | None = None

    @property
    def actor(self) -> str:
        """Name changes are attributed to: the user's first name, if known."""
        if self.user_id:
            return self.container.user_repository.display_name(self.user_id)
        return self.actor_override or UNKNOWN_ACTOR


pass_session = click.make_pass_decorator(Session)
