# sonnetkit

Core pieces for evaluating and formatting Jsonnet. It is plain Python and has
no third-party dependencies.

## What is inside

- `sonnetkit.errors` holds evaluation errors and the helpers for their messages.
  - `ErrorKind` lists every error kind. Each kind has a message template, and
    `ErrorKind.render(*args)` fills it in.
  - `EvalError(kind, *params)` is the exception. It carries `kind`, `params`,
    `message` and a `trace` list of `StackTraceElement` frames.
    `EvalError.with_description(desc, location)` appends a frame and returns
    the error. `EvalError.format_trace()` returns the message followed by one
    line per frame.
  - `jaro_winkler`, `suggest_similar` and `format_found` build "did you mean"
    hints. `format_signature` and `format_empty_str` are message helpers.
- `sonnetkit.dynamic`
  - `Pending` is a cell that is filled once, with `fill`, `unwrap`, `try_get`
    and `get`. If `get` is called on an unfilled cell, it raises an
    infinite-recursion `EvalError`.
  - `Thunk` is computed on first `evaluate()`. After that it caches the result,
    or the `EvalError` that was raised. It detects self-reference.
    `Thunk.evaluated` and `Thunk.errored` make thunks that already hold a value
    or an error.
- `sonnetkit.ctx`
  - `Context` is a lexical scope. It holds variable bindings and the `dollar`,
    `this` and `super_obj` objects.
  - `Context.binding` raises `EvalError` for an unknown name, and the message
    suggests similar names.
  - `Context.with_var` and `Context.extend` make child scopes.
  - `ContextBuilder` collects bindings, each name at most once, and then
    `build`s a new scope. `ContextBuilder.from_parent` starts from an existing
    scope.
- `sonnetkit.arrays` provides `ArrValue`, a lazy array. It can be built with
  `empty`, `eager`, `lazy`, `expr`, `chars`, `bytes`, `repeated`, `extended`,
  `range_exclusive` or `range_inclusive`.
  - `map`, `slice` and `reversed` return views and evaluate nothing.
  - `filter` evaluates every element.
  - `iter_cheap` returns an iterator only when every element costs nothing to
    produce. Otherwise it returns `None`.
  - Range and byte arrays yield floats.
- `sonnetkit.options` is a model of the command-line options. It does not
  parse command lines.
  - `ExtStr.parse` and `ExtFile.parse` read `name=value` and `name=path`
    arguments.
  - `TlaOpts.tla_args` returns the top-level arguments.
  - `StdOpts.ext_vars` and `StdOpts.ext_codes` return the external variables.
  - `MiscOpts.library_paths` returns the `jpath` entries right-most first,
    then those from `JSONNET_PATH`.
  - `ManifestOpts.manifest_format` returns a `ManifestFormat` description.
  - `TraceOpts.trace_format` returns a `TraceFormat` description.
  - `OutputOpts` records where output should go.
- `sonnetkit.printer`
  - `PrintItems` is a list of text pieces and layout `Signal`s.
  - `render(items, indent_width=2, use_tabs=False)` lays the items out as
    indented text.
- `sonnetkit.trivia` groups syntax children with the comments and whitespace
  around them.
  - It works on `Element`s, which are nodes, `Trivia` tokens, parse errors or
    separators.
  - `children`, `children_between`, `trivia_before`, `trivia_after` and
    `trivia_between` return `Child` and `EndingComments` records.
  - `should_start_with_newline` decides whether a blank line is kept.
- `sonnetkit.comments` provides `format_comments(comments, loc)`. It turns
  trivia into `PrintItems`:
  - it normalises single-line comments;
  - it strips the common indentation of multi-line comments;
  - it drops whitespace;
  - it keeps error text as it is.

## Examples

```python
from sonnetkit.arrays import ArrValue

numbers = ArrValue.range_inclusive(1, 5)
evens = numbers.filter(lambda v: v % 2 == 0)
print(list(evens.iter_cheap()))                # [2.0, 4.0]

window = numbers.slice(1, 4, None)
print(list(window.reversed().iter_cheap()))    # [4.0, 3.0, 2.0]
```

```python
from sonnetkit.ctx import ContextBuilder
from sonnetkit.dynamic import Thunk
from sonnetkit.errors import EvalError

ctx = ContextBuilder().bind("answer", Thunk.evaluated(42)).build()
print(ctx.binding("answer").evaluate())        # 42
try:
    ctx.binding("answr")
except EvalError as err:
    print(err)
# variable is not defined: answr
# There is variable with similar name present: answer
```

```python
from sonnetkit.comments import CommentLocation, format_comments
from sonnetkit.printer import render
from sonnetkit.trivia import Trivia, TriviaKind

items = format_comments(
    [Trivia(TriviaKind.SINGLE_LINE_SLASH_COMMENT, "//   hello")],
    CommentLocation.ABOVE_ITEM,
)
print(render(items), end="")                   # // hello
```

```python
from sonnetkit.options import ExtStr

ext = ExtStr.parse("name=value=with=equals")
print(ext.name, ext.value)                     # name value=with=equals
```

## What it does not do

This package contains building blocks only. It does not include:

- a Jsonnet parser;
- an evaluator or standard library;
- code to write JSON, YAML or TOML output;
- a renderer for stack traces;
- a command-line program.

`ManifestFormat` and `TraceFormat` describe the chosen output and trace styles,
but nothing in the package produces that output. The comment formatter works on
`Element`s that you supply. It does not read Jsonnet source itself.

## Running the tests

```
pip install -e .[test]
pytest
```