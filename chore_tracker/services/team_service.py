"""Team member collection operations."""

from chore_tracker.core.config import Constants
from chore_tracker.domain.create_models import TeamMemberCreate
from chore_tracker.domain.team import TeamMember
from chore_tracker.services.chore_service import Chores, generate_id, unassign_member


Members = tuple[TeamMember, ...]


def next_color(members: Members) -> str:
    """Pick the first palette color no current member uses.

    Once every palette color is taken, colors repeat based on team size.
    """
    palette = Constants.TEAM_COLORS
    used = {member.color for member in members}
    for color in palette:
        if color not in used:
            return color
    return palette[len(members) % len(palette)]


def build_member(data: TeamMemberCreate, members: Members) -> TeamMember:
    """Build a new team member, assigning a palette color if none was chosen."""
    return TeamMember(
        id=generate_id(),
        name=data.name,
        color=data.color or next_color(members),
    )


def get_member(members: Members, member_id: str) -> TeamMember:
    """Look up a team member by id.

    Raises:
        KeyError: If no member has that id
    """
    for member in members:
        if member.id == member_id:
            return member
    raise KeyError(f"Member not found: {member_id}")


def check_assignee(members: Members, assignee_id: str | None) -> None:
    """Check that a chore's assignee, if any, is a current team member.

    Raises:
        ValueError: If `assignee_id` is set but matches no member
    """
    if assignee_id is not None and all(member.id != assignee_id for member in members):
        raise ValueError(f"Assignee is not a team member: {assignee_id}")


def add_member(members: Members, member: TeamMember) -> Members:
    """Return the team with `member` appended."""
    return (*members, member)


def remove_member(members: Members, chores: Chores, member_id: str) -> tuple[Members, Chores]:
    """Remove a member and unassign their chores.

    Returns:
        Tuple of (remaining members, chores with the member's assignments cleared)

    Raises:
        KeyError: If no member has that id
    """
    get_member(members, member_id)
    remaining = tuple(member for member in members if member.id != member_id)
    return remaining, unassign_member(chores, member_id)
