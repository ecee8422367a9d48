# kitbag

A small collection of self-contained data structures and algorithms written in
plain Python, with no runtime dependencies.

## What is inside

| Module           | Provides |
|------------------|----------|
| `kitbag.avl`     | `AvlTree`: an ordered set of distinct items kept as an AVL tree. Each node stores the size of its subtree, so `rank()` runs in logarithmic time. Also `find`, `insert`, `erase`, `pop_first`, `iter_from` and `validate`. |
| `kitbag.btree`   | `BTree`: an in-memory B-tree (duplicates allowed) with `get`, `interval`, `put`, `delete`, `first`, `iter_from` and ordered iteration. `BTree.from_node_size()` picks the degree from a node size in bytes. |
| `kitbag.deque`   | `RingDeque`: a double-ended queue backed by a power-of-two ring buffer, with `push`, `pop`, `unshift`, `shift`, `first`, `last`, indexing and `resize`. |
| `kitbag.bits`    | `popcount64`, `dna_count64` (count one base code among 32 packed two-bit bases) and `roundup32`. |
| `kitbag.ketopt`  | `OptionParser` and `getopt`: a getopt_long-style parser for short and long options, with unique-prefix matching of long options and optional permutation of arguments. `LongOption`, `ArgKind` and `ParsedOption` describe options and results. |
| `kitbag.graph`   | `Graph` and `Vertex`: integer vertices joined by arcs with a two-bit orientation; adding an arc also records its reverse. |
| `kitbag.align`   | `align`, `QueryProfile`, `AlignFlag` and `AlignResult`: local Smith-Waterman alignment with affine gaps, using byte or 16-bit scores, optional second-best tracking, early stop and start-position search. |
| `kitbag.banded`  | `extend` and `global_align` (with `ExtendResult` and `GlobalResult`): banded extension alignment and banded global alignment with a CIGAR. |

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

An ordered set with rank queries:

```python
from kitbag.avl import AvlTree

tree = AvlTree("MNOLKQOPHIA")
print("".join(tree))   # AHIKLMNOPQ
print(tree.rank("K"))  # 4: the number of items <= "K"
tree.erase("M")
```

A B-tree:

```python
from kitbag.btree import BTree

tree = BTree(t=3)
for key in [5, 1, 9, 3, 7]:
    tree.put(key)
print(list(tree))            # [1, 3, 5, 7, 9]
print(tree.interval(4))      # (3, 5)
print(list(tree.iter_from(6)))  # [7, 9]
```

Parsing a command line:

```python
from kitbag.ketopt import ArgKind, LongOption, getopt

longopts = [LongOption("verbose", ArgKind.NONE, 300)]
options, rest = getopt(["prog", "-x", "3", "--verbose", "file"], "x:", longopts)
for opt in options:
    print(opt.opt, opt.arg)  # x 3, then 300 None
print(rest)                  # ['file']
```

A graph with oriented arcs:

```python
from kitbag.graph import Graph

g = Graph()
g.put_arc(1, 2, 0)
print(g.neighbors(2))    # [(1, 3)]: the reverse arc
print(g.format_lines())  # ['v 1', 'a 1>>2', 'v 2']
```

Local alignment over the alphabet {0, 1, 2, 3, 4}, where 4 is an ambiguous
base that scores 0:

```python
from kitbag.align import AlignFlag, align

mat = [
    (1 if i == j else -3) if i < 4 and j < 4 else 0
    for i in range(5)
    for j in range(5)
]
result = align([0, 1, 2, 3], [3, 0, 1, 2, 3, 1], 5, mat, 5, 2, AlignFlag.START)
print(result.score, result.tb, result.te, result.qb, result.qe)
```

Banded global alignment:

```python
from kitbag.banded import global_align

result = global_align([0, 1, 2, 3], [0, 1, 3], 5, mat, 5, 2, w=10)
print(result.score, result.cigar_string)
```

## What it does not provide

kitbag has no hash table types of its own (Python's `dict` and `set` serve
that purpose), no thread-pool or pipeline helpers, and no command-line program:
everything here is a library to import.