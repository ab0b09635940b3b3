"""Tree nodes of a material (VMT) document.

A document is a tree of named nodes: groups hold an ordered list of child
nodes, and value nodes hold a string, an integer or a single-precision float.
Name lookups within a group ignore ASCII case.
"""

import abc
import enum
import math
import re
import struct

_F32 = struct.Struct("<f")

_C_SPACE = "[ \t\n\v\f\r]*"
_INTEGER_PREFIX = re.compile(_C_SPACE + r"([+-]?[0-9]+)")
_FLOAT_PREFIX = re.compile(
    _C_SPACE
    + r"(?:"
    + r"(?P<hex>[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)"
    + r"(?:[pP][+-]?[0-9]+)?)"
    + r"|(?P<dec>[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
    + r"|(?P<special>[+-]?(?:inf(?:inity)?|nan))"
    + r")",
    re.IGNORECASE,
)


def _parse_integer(text):
    """Read the leading integer of ``text``; 0 when there is none."""
    match = _INTEGER_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _parse_float(text):
    """Read the leading floating point number of ``text``; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    if match.group("hex"):
        return float.fromhex(match.group("hex"))
    return float(match.group("dec") or match.group("special"))


def _to_single(value):
    """Round ``value`` to the nearest single-precision float."""
    value = float(value)
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class NodeType(enum.IntEnum):
    """Kinds of node met while walking a document."""

    GROUP = 0
    GROUP_END = 1
    STRING = 2
    INTEGER = 3
    SINGLE = 4


class VMTNode(abc.ABC):
    """A named node of a material document."""

    def __init__(self, name):
        self.name = str(name)
        self._parent = None

    @property
    def parent(self):
        """The group holding this node, or ``None`` for a detached node."""
        return self._parent

    @property
    @abc.abstractmethod
    def node_type(self):
        """The kind of this node."""

    @abc.abstractmethod
    def clone(self):
        """Return a detached deep copy of this node."""

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class VMTValueNode(VMTNode):
    """A node holding a single value that can be set from text."""

    @abc.abstractmethod
    def set_from_string(self, text):
        """Set the value by parsing ``text``."""


class VMTStringNode(VMTValueNode):
    """A node holding a text value."""

    def __init__(self, name, value=""):
        super().__init__(name)
        self.value = str(value)

    def set_from_string(self, text):
        self.value = str(text)

    @property
    def node_type(self):
        return NodeType.STRING

    def clone(self):
        return VMTStringNode(self.name, self.value)

    def __repr__(self):
        return f"VMTStringNode({self.name!r}, {self.value!r})"


class VMTIntegerNode(VMTValueNode):
    """A node holding an integer value."""

    def __init__(self, name, value=0):
        super().__init__(name)
        self.value = value

    @property
    def value(self):
        """The integer value; text assigned to it is parsed like ``atoi``."""
        return self._value

    @value.setter
    def value(self, value):
        if isinstance(value, str):
            value = _parse_integer(value)
        self._value = int(value)

    def set_from_string(self, text):
        self._value = _parse_integer(text)

    @property
    def node_type(self):
        return NodeType.INTEGER

    def clone(self):
        return VMTIntegerNode(self.name, self._value)

    def __repr__(self):
        return f"VMTIntegerNode({self.name!r}, {self._value!r})"


class VMTSingleNode(VMTValueNode):
    """A node holding a single-precision float value."""

    def __init__(self, name, value=0.0):
        super().__init__(name)
        self.value = value

    @property
    def value(self):
        """The float value, rounded to single precision."""
        return self._value

    @value.setter
    def value(self, value):
        if isinstance(value, str):
            value = _parse_float(value)
        self._value = _to_single(value)

    def set_from_string(self, text):
        self._value = _to_single(_parse_float(text))

    @property
    def node_type(self):
        return NodeType.SINGLE

    def clone(self):
        return VMTSingleNode(self.name, self._value)

    def __repr__(self):
        return f"VMTSingleNode({self.name!r}, {self._value!r})"


class VMTGroupNode(VMTNode):
    """A node holding an ordered list of child nodes."""

    def __init__(self, name):
        super().__init__(name)
        self._children = []

    @property
    def node_type(self):
        return NodeType.GROUP

    def clone(self):
        copy = VMTGroupNode(self.name)
        for child in self._children:
            copy.add_node(child.clone())
        return copy

    def __len__(self):
        return len(self._children)

    def __iter__(self):
        return iter(list(self._children))

    def add_node(self, node):
        """Append ``node`` as a child and return it."""
        if not isinstance(node, VMTNode):
            raise TypeError("only VMT nodes can be added to a group")
        node._parent = self
        self._children.append(node)
        return node

    def add_group_node(self, name):
        """Append a new empty group and return it."""
        return self.add_node(VMTGroupNode(name))

    def add_string_node(self, name, value):
        """Append a new string node and return it."""
        return self.add_node(VMTStringNode(name, value))

    def add_integer_node(self, name, value):
        """Append a new integer node and return it."""
        return self.add_node(VMTIntegerNode(name, value))

    def add_single_node(self, name, value):
        """Append a new float node and return it."""
        return self.add_node(VMTSingleNode(name, value))

    def remove_node(self, node):
        """Remove ``node`` if it is a child of this group; otherwise do nothing."""
        for position, child in enumerate(self._children):
            if child is node:
                del self._children[position]
                child._parent = None
                return

    def remove_all_nodes(self):
        """Remove every child."""
        for child in self._children:
            child._parent = None
        self._children.clear()

    def get_node(self, key):
        """Return a child by position or by case-insensitive name, or ``None``."""
        if isinstance(key, str):
            wanted = key.lower()
            return next(
                (child for child in self._children if child.name.lower() == wanted),
                None,
            )
        index = int(key)
        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def __repr__(self):
        return f"VMTGroupNode({self.name!r}, {len(self._children)} nodes)"