"""Profile domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

SOCIAL_PLATFORMS = ("youtube", "twitter", "instagram", "linkedin", "facebook")


@dataclass
class Experience:
    """A single experience entry embedded in a profile."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    role: str | None = None
    director: str | None = None
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Education:
    """A single education entry embedded in a profile."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: date | None = None
    current: bool = False
    description: str | None = None


@dataclass
class Profile:
    """Domain entity for a user's public profile.

    Experience and education are kept most-recent-first: new entries are
    prepended, never appended.
    """

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    skills: list[str] = field(default_factory=list)
    company: str | None = None
    location: str | None = None
    website: str | None = None
    bio: str | None = None
    spotlight_pin: str | None = None
    social: dict[str, str] = field(default_factory=dict)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Owner snapshot, filled on reads
    user_name: str | None = None
    user_avatar: str | None = None

    def add_experience(self, entry: Experience) -> None:
        self.experience.insert(0, entry)

    def remove_experience(self, exp_id: UUID) -> bool:
        """Drop the entry with ``exp_id``. Returns False if it was not present."""
        remaining = [exp for exp in self.experience if exp.id != exp_id]
        removed = len(remaining) != len(self.experience)
        self.experience = remaining
        return removed

    def add_education(self, entry: Education) -> None:
        self.education.insert(0, entry)

    def remove_education(self, edu_id: UUID) -> bool:
        """Drop the entry with ``edu_id``. Returns False if it was not present."""
        remaining = [edu for edu in self.education if edu.id != edu_id]
        removed = len(remaining) != len(self.education)
        self.education = remaining
        return removed
