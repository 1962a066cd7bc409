"""
Moderable resource registry.

Events and venues share one moderation workflow; everything that differs
between them (model, owner column, owner account kind, admin permission)
is looked up here by ResourceType.
"""
import enum
from dataclasses import dataclass
from typing import Type

from eventuraa.models import Event, Venue, Permission, UserRole
from eventuraa.models.base import Base


class ResourceType(str, enum.Enum):
    EVENTS = "events"
    VENUES = "venues"


@dataclass(frozen=True)
class ResourceKind:
    type: ResourceType
    model: Type[Base]
    owner_attr: str
    owner_role: UserRole
    permission: Permission
    label: str

    def owner_id(self, resource) -> int:
        return getattr(resource, self.owner_attr)

    @property
    def owner_column(self):
        return getattr(self.model, self.owner_attr)


RESOURCE_KINDS = {
    ResourceType.EVENTS: ResourceKind(
        type=ResourceType.EVENTS,
        model=Event,
        owner_attr="organizer_id",
        owner_role=UserRole.ORGANIZER,
        permission=Permission.MANAGE_EVENTS,
        label="Event",
    ),
    ResourceType.VENUES: ResourceKind(
        type=ResourceType.VENUES,
        model=Venue,
        owner_attr="venue_host_id",
        owner_role=UserRole.VENUE_HOST,
        permission=Permission.MANAGE_VENUES,
        label="Venue",
    ),
}


def kind_of(resource_type: ResourceType) -> ResourceKind:
    return RESOURCE_KINDS[ResourceType(resource_type)]
