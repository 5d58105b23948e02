from anytree import LoopError, TreeError

__all__ = ["LoopError", "NodeAlreadyAttachedError", "TreeError"]


class NodeAlreadyAttachedError(TreeError):  # type: ignore
    """
    Exception raised when attaching a node that already belongs to another parent.

    Nodes are owned by exactly one parent. Moving a node requires detaching it first
    with the old parent's ``remove_node``; ``add_child`` never re-parents implicitly.

    Attributes:
        path (str): Path of the node that was being attached.
        parent_path (str): Path of the parent the node is currently attached to.

    Example:
        >>> error = NodeAlreadyAttachedError("root/a.txt", "root")
        >>> str(error)
        'Node root/a.txt is already attached to root'
    """

    def __init__(self, path: str, parent_path: str) -> None:
        """
        Initialize the exception with the offending node and its current parent.

        Args:
            path (str): Path of the node that was being attached.
            parent_path (str): Path of the node's current parent.
        """
        self.path = path
        self.parent_path = parent_path
        super().__init__(f"Node {path} is already attached to {parent_path}")
