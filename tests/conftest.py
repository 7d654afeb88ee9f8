"""Test setup for lesson2html."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

OBJECTS_LESSON = """\
# Objects

Objects group related data. See [Arrays](basics/arrays.md).

## Creating objects

```js
const user = { name: "Ada" };
```

## Reading properties

Use dot or bracket notation.

### The `this` keyword

Inside a method `this` refers to the receiver.
"""

ARRAYS_LESSON = """\
# Arrays

- `push` adds to the end
- `pop` removes from the end

## Iterating

```js
for (const x of xs) console.log(x);
```

Back to [Objects](../objects.md#creating-objects).
"""

JSON_LESSON = """\
# JSON

| Method | Purpose |
| --- | --- |
| `JSON.parse` | text to value |
"""


@pytest.fixture
def lesson_dir(tmp_path: Path) -> Path:
    """A small content root with nested lessons."""
    root = tmp_path / "lessons"
    (root / "basics").mkdir(parents=True)
    (root / "objects.md").write_text(OBJECTS_LESSON, encoding="utf-8")
    (root / "basics" / "arrays.md").write_text(ARRAYS_LESSON, encoding="utf-8")
    (root / "json.md").write_text(JSON_LESSON, encoding="utf-8")
    return root


@pytest.fixture
def scenario_text() -> str:
    """Title, prose, sub-heading, and a js code sample."""
    return "# Title\n\nSome text\n\n## Sub\n\n```js\nconsole.log(1)\n```"
