# valvetex

Pure-Python building blocks for VTF textures and VMT materials. It has no
dependencies outside the standard library.

## Modules

- `valvetex.vtf_format`: VTF constants and enumerations (`ImageFormat`,
  `ImageFlag`, `CubeMapFace`, `MipmapFilter`, `SharpenFilter`, `DXTQuality`,
  `KernelFilter`, `HeightConversionMethod`, `NormalAlphaResult`,
  `ResizeMethod`, `LookDir`, `ResourceEntryType`), the `make_resource_id`
  helper, and two structures with `from_bytes` / `to_bytes` for the packed
  little-endian layout:
  - `Resource`: one resource dictionary entry, with `id_bytes`, `flags` and
    `has_data_chunk`.
  - `VTFHeader`: a 7.x header. The depth field is present from minor
    version 2 (`has_depth`) and the resource dictionary from minor version 3
    (`has_resources`, at most 32 entries). Malformed data raises
    `VTFLibError`.
- `valvetex.float16`: `Float16`, a value that keeps only the upper 16 bits
  of an IEEE single (sign, 8-bit exponent, 7 mantissa bits). It is built from
  a number or with `Float16.from_bits`, exposes `bits` and `value`, and
  supports comparison and `+ - * /`; every result is truncated again.
  Division by zero gives infinity or NaN rather than raising.
- `valvetex.memory_streams`: `SeekMode`, `MemoryReader` and `MemoryWriter`.
  Both are context managers; `seek` clamps the position to the valid range.
  `read` and `write` transfer as much as fits and return what they could;
  `read_byte` and `write_byte` raise `EndOfStreamError` at the end, and
  using a stream that is not open raises `StreamNotOpenError`.
  `MemoryWriter` has a fixed capacity and `getvalue()` returns what was
  written.
- `valvetex.proc_streams`: `ProcReader` and `ProcWriter`, streams whose every
  operation calls a user callback taken from a `ProcTable`, keyed by `Proc`.
  Without an explicit table they use the module's shared `default_procs`.
  A missing required callback raises `VTFLibError`.
- `valvetex.vmt_nodes`: the material node tree: `VMTGroupNode`,
  `VMTStringNode`, `VMTIntegerNode`, `VMTSingleNode` and `NodeType`. Group
  lookups by name ignore ASCII case; integer and float nodes parse text the
  way `atoi` / `atof` do, and float values are rounded to single precision.
- `valvetex.vmt_cursor`: `MaterialCursor`, which moves through a node tree
  depth first (`first`, `last`, `next`, `previous`, `parent`, `child`),
  reads and sets values at the current position, adds nodes to the current
  group, and yields every position with `walk()`.
- `valvetex.errors`: `VTFLibError` and its subclasses `EndOfStreamError`
  and `StreamNotOpenError`.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Example

```python
from valvetex.vmt_nodes import VMTGroupNode
from valvetex.vmt_cursor import MaterialCursor

root = VMTGroupNode("LightmappedGeneric")
root.add_string_node("$basetexture", "brick/brickwall001")
root.add_integer_node("$translucent", 1)
proxies = root.add_group_node("Proxies")
proxies.add_single_node("$scale", 0.5)

cursor = MaterialCursor(root)
for node_type, node in cursor.walk():
    print(node_type.name, node.name)
```

Reading from a memory buffer:

```python
from valvetex.memory_streams import MemoryReader, SeekMode

with MemoryReader(b"VTF\0rest") as reader:
    magic = reader.read(4)      # b"VTF\x00"
    reader.seek(0, SeekMode.END)
    print(reader.tell())        # 8
```

## What it does not do

The package reads and writes VTF headers only; it does not decode, encode
or convert image data, generate MIP maps or normal maps. It holds material
node trees in memory but does not parse or write VMT text. There are no
file-backed streams and no command-line tool.