# opgm

Building blocks for matching property-graph patterns against large data graphs.
The package has four parts:

- `opgm.front_end` reads pattern queries written in a small s-expression
  language. It checks them, simplifies their constraints and turns them into
  pattern graphs.
- `opgm.pattern` holds `PatternGraph`, a labelled graph with vertex and edge
  constraints. It also holds `Characteristic`, the fingerprint of the star
  around one root vertex.
- `opgm.planner` breaks a pattern into stars with `decompose_stars` and builds
  a `ScanPlan` and a `JoinPlan` for those stars.
- `opgm.memory_manager` and `opgm.tools` provide byte buffers and small
  iteration helpers.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Query language

```
(match (vertices (u1 1) (u2 1) (u3 2))
       (arcs  (u1 u2 10))
       (edges (u2 u3 20))
       (where (and (< u1 u2) (>= u3 8))))
```

- `vertices`: each vertex id `uN` with its label.
- `arcs`: directed edges, written as `(src dst label)`.
- `edges`: undirected edges, in the same form.
- `where`: an optional boolean constraint. It may use `and`, `or`, `not`,
  `<`, `>=`, `=`, `!=`, `mod` (also written `%`), whole numbers, vertex ids
  and `#t` / `#f`. A `where` clause must come after the arcs or edges.

Vertex ids must fit in 32 signed bits and labels in 16 signed bits.

## Front end

```python
from opgm.front_end.parser import parse
from opgm.front_end.checker import check
from opgm.front_end.rewriter import rewrite
from opgm.front_end.codegen import codegen

ast = parse("(match (vertices (u1 0) (u2 0) (u3 0))"
            "       (edges (u1 u2 0) (u2 u3 0))"
            "       (where (< u1 u2)))")
check(ast)
constraints = rewrite(ast.constraint) if ast.constraint is not None else []
pattern, global_constraints = codegen(ast.vertices, ast.arcs, ast.edges, constraints)
print(pattern.vertices(), pattern.edges())
```

- `parse` returns an `Ast` with `vertices`, `arcs`, `edges` and `constraint`.
  `expr_parse` parses a single expression into an `Expr`.
- `parse` and `expr_parse` raise `GispError` on malformed input. `check`
  raises `GispError` with the message `graph` when the pattern is malformed,
  and `type` when the constraint is badly typed.
- `simplify` folds constants and pushes negations inwards. `rewrite`
  simplifies and then splits the result into its top-level conjuncts.
- `codegen` attaches each constraint on one vertex, or on two adjacent
  vertices, to the pattern graph as a `VertexConstraint` or `EdgeConstraint`.
  It returns all other constraints as a list of global constraints.
- `VertexConstraint` and `EdgeConstraint` (in `opgm.front_end.constraints`)
  are callable predicates over vertex ids. `evaluate(expr, env)` evaluates an
  expression with `u<i>` bound to `env[i]`.

## Planner

The planner needs a data graph: any object with a `count(vlabel)` method that
returns how many data vertices carry the given label.

```python
from opgm.planner.decompose import decompose_stars
from opgm.planner.scan import ScanPlan
from opgm.planner.join import JoinPlan
from opgm.planner.info import IndexType


class LabelCounts:
    def __init__(self, counts):
        self.counts = counts

    def count(self, vlabel):
        return self.counts.get(vlabel, 0)


roots = decompose_stars(LabelCounts({0: 100}), pattern)
scan_plan = ScanPlan(pattern, roots)
for vlabel, infos in scan_plan.plan:
    print(vlabel, [info.id for info in infos])
join_plan = JoinPlan(pattern, IndexType.HASH, scan_plan.stars)
print(join_plan.indexed_joins, join_plan.intersections)
```

- `decompose_stars` returns root vertices whose stars cover every edge of the
  pattern. The order of the roots matters for the join. It raises
  `ValueError` when the pattern has no vertices.
- `ScanPlan.plan` lists, for each root label, the distinct characteristics to
  match as `CharacteristicInfo` objects. `ScanPlan.stars` holds one
  `StarInfo` per root.
- `JoinPlan` lists the indexed joins (`IndexedJoinPlan`) and the leaf
  intersections (`IntersectionPlan`) needed to combine the stars.

## Buffers and helpers

```python
from opgm.memory_manager import open_mem

buf = open_mem(12)
buf.write_array("i", 0, [3, 2, 1])
print(buf.read_array("i", 0, 3))  # [3, 2, 1]
print(buf.read("i", 4))           # 2
buf.resize(8)
print(len(buf))                   # 8
```

Values are little-endian, and positions are byte offsets. `fmt` is one
`struct` format character. The buffer kinds are:

- `open_mem(size)` returns a `MemBuffer`, held in memory.
- `open_mmap(path)` returns a `MmapBuffer`, a read-only mapping of an
  existing file.
- `open_mmap_mut(path, size)` returns a `MmapMutBuffer`. It creates or
  truncates the file and maps it writable and resizable.
- `open_sink()` returns a `SinkBuffer`. It accepts and discards writes and
  cannot be read.

Every buffer is a context manager and closes on exit.

`opgm.tools.group_by(items, key)` yields `(key, run)` for each run of
consecutive items with equal keys. `SizedIterator` wraps an iterable and
reports a declared length.

## What this package does not do

The package has no command-line tool. It cannot build or read data-graph
files, scan a data graph for stars, or run joins to count matches. It stops
at parsing, checking and planning a query. The planner learns about the data
only through the `count(vlabel)` method of the object you pass in.

## Running the tests

```
pytest
```