"""User directory entries.

Only the profile data needed to attribute changes lives here;
credentials belong to the auth provider.
"""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_ACTOR = "Unknown"


@dataclass
class UserProfile:

    id: str
    first_name: str
    role: str = "Employee"
    photo_url: str = ""

    @property
    def display_name(self) -> str:
        return self.first_name.strip() or UNKNOWN_ACTOR
