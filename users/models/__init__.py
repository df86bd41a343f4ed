from .user import User
from .relations import RelationEdge, Following, Follower, WaitingFollower

__all__ = [
    "User",
    "RelationEdge",
    "Following",
    "Follower",
    "WaitingFollower",
]
