"""Identity shared by every pedigree graph node."""
from __future__ import annotations

from collections.abc import Hashable

from pedigree_model.exceptions import InvalidNodeId
from pedigree_model.models import AdoptedStatus, Gender, is_valid


def check_node_id(node_id: Hashable) -> Hashable:
    """Return ``node_id`` if it can identify a node, else raise InvalidNodeId."""
    if node_id is None or isinstance(node_id, bool) or node_id in ("", "U"):
        raise InvalidNodeId(node_id)
    return node_id


class NodeIdentity:
    """Id, gender, adoption and comments of a node.

    Person nodes embed one of these and call it explicitly.
    """

    def __init__(self, node_id: Hashable, gender: str = Gender.UNKNOWN.value):
        self.node_id = check_node_id(node_id)
        self.gender = Gender.UNKNOWN.value
        self.adopted_status = AdoptedStatus.NOT_ADOPTED.value
        self.comments = ""
        self.set_gender(gender)

    def set_gender(self, gender: str | None) -> bool:
        gender = (gender or "").upper()
        if not is_valid(Gender, gender):
            return False
        self.gender = Gender(gender).value
        return True

    def set_adopted_status(self, status: str | None) -> bool:
        status = status or ""
        if not is_valid(AdoptedStatus, status):
            return False
        self.adopted_status = AdoptedStatus(status).value
        return True

    def set_comments(self, comments: str | None) -> bool:
        comments = comments or ""
        if comments == self.comments:
            return False
        self.comments = comments
        return True

    def reset(self) -> None:
        self.gender = Gender.UNKNOWN.value
        self.adopted_status = AdoptedStatus.NOT_ADOPTED.value
        self.comments = ""

    def get_properties(self) -> dict[str, str]:
        info: dict[str, str] = {}
        if self.gender != Gender.UNKNOWN.value:
            info["gender"] = self.gender
        if self.comments:
            info["comments"] = self.comments
        if self.adopted_status:
            info["adoptedStatus"] = self.adopted_status
        return info
