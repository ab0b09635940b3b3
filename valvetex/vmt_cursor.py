"""A cursor for stepping through a material document depth first.

The cursor sits either on a group's start, on one of its children, or on
its end. Stepping forward from a group's end returns to the parent with the
group itself selected. Stepping backward mirrors this.
"""

from .errors import VTFLibError
from .vmt_nodes import NodeType, VMTGroupNode


class MaterialCursor:
    """Depth-first navigation and editing of a material node tree."""

    def __init__(self, root=None):
        self.root = root
        self._group = None
        self._indices = []

    def reset(self):
        """Forget the current position."""
        self._group = None
        self._indices.clear()

    def _locate(self):
        if self._group is None:
            return None
        index = self._indices[-1]
        if index == -1 or index == len(self._group):
            return self._group
        return self._group.get_node(index)

    def _require(self):
        node = self._locate()
        if node is None:
            raise VTFLibError("No current node.")
        return node

    @property
    def current_node(self):
        """The node under the cursor, or ``None`` when not positioned."""
        return self._locate()

    @property
    def node_type(self):
        """Kind of position: a group start, a group end or a value node."""
        if self._group is None:
            return None
        index = self._indices[-1]
        if index == -1:
            return NodeType.GROUP
        if index == len(self._group):
            return NodeType.GROUP_END
        return self._group.get_node(index).node_type

    def first(self):
        """Move to the start of the root group."""
        if self.root is None:
            return False
        self._group = self.root
        self._indices = [-1]
        return True

    def last(self):
        """Move to the end of the root group."""
        if self.root is None:
            return False
        self._group = self.root
        self._indices = [len(self.root)]
        return True

    def _ascend(self):
        parent = self._group.parent
        if parent is None:
            return False
        self._group = parent
        self._indices.pop()
        return True

    def next(self):
        """Step forward depth first; return False when nothing follows."""
        if self._group is None:
            return False
        if self._indices[-1] == len(self._group):
            return self._ascend()
        self._indices[-1] += 1
        if self._indices[-1] == len(self._group):
            return True
        node = self._group.get_node(self._indices[-1])
        if node.node_type == NodeType.GROUP:
            self._group = node
            self._indices.append(-1)
        return True

    def previous(self):
        """Step backward depth first; return False when nothing precedes."""
        if self._group is None:
            return False
        if self._indices[-1] == -1:
            return self._ascend()
        self._indices[-1] -= 1
        if self._indices[-1] == -1:
            return True
        node = self._group.get_node(self._indices[-1])
        if node.node_type == NodeType.GROUP:
            self._group = node
            self._indices.append(len(node))
        return True

    def parent(self):
        """Move up to the parent of the current group."""
        if self._group is None:
            return False
        return self._ascend()

    def child(self, name):
        """Move to the child of the current group with ``name`` (any case)."""
        node = self._locate()
        if node is None or node.node_type != NodeType.GROUP:
            return False
        wanted = name.lower()
        for index, candidate in enumerate(node):
            if candidate.name.lower() != wanted:
                continue
            if node is not self._group:
                self._group = node
                self._indices.append(-1)
            if candidate.node_type == NodeType.GROUP:
                self._group = candidate
                self._indices.append(-1)
            else:
                self._indices[-1] = index
            return True
        return False

    @property
    def name(self):
        """Name of the current node, or ``None`` when not positioned."""
        node = self._locate()
        return None if node is None else node.name

    @name.setter
    def name(self, value):
        self._require().name = str(value)

    def _value_of(self, node_type, default):
        node = self._require()
        return node.value if node.node_type == node_type else default

    def _set_value(self, node_type, value):
        node = self._require()
        if node.node_type == node_type:
            node.value = value

    @property
    def string_value(self):
        """Value of the current string node, or ``None`` for other nodes."""
        return self._value_of(NodeType.STRING, None)

    @string_value.setter
    def string_value(self, value):
        self._set_value(NodeType.STRING, value)

    @property
    def integer_value(self):
        """Value of the current integer node, or 0 for other nodes."""
        return self._value_of(NodeType.INTEGER, 0)

    @integer_value.setter
    def integer_value(self, value):
        self._set_value(NodeType.INTEGER, value)

    @property
    def single_value(self):
        """Value of the current float node, or 0.0 for other nodes."""
        return self._value_of(NodeType.SINGLE, 0.0)

    @single_value.setter
    def single_value(self, value):
        self._set_value(NodeType.SINGLE, value)

    def _target_group(self):
        node = self._require()
        return node if isinstance(node, VMTGroupNode) else None

    def add_group(self, name):
        """Add a group to the current group node; return it, or ``None``."""
        group = self._target_group()
        return None if group is None else group.add_group_node(name)

    def add_string(self, name, value):
        """Add a string node to the current group node; return it, or ``None``."""
        group = self._target_group()
        return None if group is None else group.add_string_node(name, value)

    def add_integer(self, name, value):
        """Add an integer node to the current group node; return it, or ``None``."""
        group = self._target_group()
        return None if group is None else group.add_integer_node(name, value)

    def add_single(self, name, value):
        """Add a float node to the current group node; return it, or ``None``."""
        group = self._target_group()
        return None if group is None else group.add_single_node(name, value)

    def walk(self):
        """Yield ``(node_type, node)`` for every position from the first on."""
        if not self.first():
            return
        yield self.node_type, self.current_node
        while self.next():
            yield self.node_type, self.current_node