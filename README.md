# gitview

`gitview` provides building blocks for a git history viewer. It works on
text that git has already produced, such as the output of `git show-ref -d`,
`git branch` and `stg series`, and on command templates that ask the user
for input. It uses only the standard library.

## Installation

```
pip install gitview
```

## Modules

- `gitview.types`: `RefType` flags (`TAG`, `BRANCH`, `RMT_BRANCH`,
  `CUR_BRANCH`, `REF`, `APPLIED`, `UN_APPLIED`, `ANY_REF`). Also `TreeEntry`,
  which sorts directories (`type == "tree"`) before files and otherwise by
  locale order, `Reference` with `names(mask)`, and `WorkingDirInfo`.
- `gitview.refs`: `RefMap` rebuilds a sha-to-reference map from
  `git show-ref -d` output with `load()`. `load()` returns the StGit patch
  names and shas for the given StGit branch. `apply_stgit_series()` marks
  those patches as applied or unapplied. You can then query the map with
  `check`, `names`, `find_sha`, `all_shas`, `all_names`, `is_patch_name`
  and `rev_info`. `parse_current_branch()` reads `git branch` output and
  returns an empty string for a detached HEAD.
- `gitview.inputdialog`: `InputTemplate` parses commands that contain
  `%type[options]:name=default%` tokens into `InputField`s. You can read
  values with `value()`, change them with `set_value()`, check them with
  `validate()`, and substitute them, together with `$NAME` variables, using
  `replace()`. `RefNameValidator` repairs and checks git ref names and
  returns a `ValidationState`. `parse_string` and `parse_string_list`
  resolve defaults.
- `gitview.utils`: `quote` and `quote_list` for command arguments,
  `is_image_file` and `is_binary_file` (guesses from the file extension),
  `escape_html`, `color_match` (wraps regex matches in red bold markup),
  `format_list` (HTML table rows) and `local_date` (a cached conversion of
  git timestamps).

## Examples

```python
from gitview.refs import RefMap
from gitview.types import RefType

sha = "a" * 40
refs = RefMap()
refs.load(f"{sha} refs/heads/master\n{sha} refs/tags/v1.0\n", head_sha=sha)
print(refs.names(sha, RefType.BRANCH))   # ['master']
print(refs.rev_info(sha))                # HEAD: master   Tag: v1.0
```

```python
from gitview.inputdialog import InputTemplate

tpl = InputTemplate("git checkout -b %lineedit[ref]:branch=topic%", {})
tpl.set_value("branch", "feature")
print(tpl.replace({}))   # git checkout -b feature
```

## What it does not do

The package does not run git itself. To use it, capture the output of
`git show-ref`, `git branch` or `stg series` yourself and pass it in.

The package also does not:

- parse `git diff-tree` output;
- load commit history;
- create commits, patches or merges;
- provide a user interface.

`InputTemplate` holds field values but does not display a dialog.

## Running the tests

```
pip install -e .[test]
pytest
```