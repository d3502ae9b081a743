# gust

A small version control system for a single working directory. It keeps
file snapshots, commits and branches in a `.gust` directory at the
project root. State is stored as compact JSON files, and file contents
as blobs named by their SHA-256 hash.

It needs nothing beyond the Python standard library (Python 3.10 or later).

## Installation

```
pip install .
```

This installs the `gust` command.

## Usage

Every command except `init` looks for the project by walking up from the
current directory until it finds a `.gust` directory.

Create a project in the current directory. This fails if `.gust` already
exists:

```
gust init
```

Stage changed files, or every changed file below a directory, then commit
them. The message is optional and defaults to an empty string:

```
gust add notes.txt src
gust commit -m "First snapshot"
```

Only files that differ from the last commit are staged. Committing with
nothing staged is an error.

Remove paths, or every file below a directory, from the staging area:

```
gust rm src/scratch.txt
```

See what is staged and what has changed since the last commit:

```
gust status
```

Changes are shown as `+` (added), `~` (modified) and `-` (removed).

Show the commit history of HEAD, newest first, one `message: hash` line
per commit:

```
gust info
```

List branches (the current one is marked with `*`; a detached HEAD is
shown as `* HEAD attached at <hash>`), or create a new branch:

```
gust branch
gust branch feature
```

A new branch made from a named branch starts at that branch's latest
commit; one made while HEAD is detached takes over the detached history.
Creating a branch does not switch to it.

Switch to a branch, or to a single commit by a unique prefix of its hash.
The mode must be given with `-m`/`--mode`:

```
gust checkout feature --mode branch
gust checkout 3fa9 --mode commit
```

Checking out a commit detaches HEAD; new commits then go to the detached
history, which is discarded when you check out something else. Checking
out requires a clean working tree. It deletes working-tree files that are
not in the target snapshot (ignored files are left alone) and writes the
snapshot's files from their blobs.

On an error, `gust` prints the message to standard error and exits with
status 1.

## Ignoring files

A `.gustignore` file at the project root lists paths to leave alone, one
per line. Lines starting with `#` are comments. A line starting with `/`
names a path relative to the root; it is used only if that path exists,
and naming a file inside such an ignored directory on the command line is
an error. Any other line matches every path that ends with its
components.

```
# build output
/build
secret.env
```

## Use from Python

```python
from gust.repository import Repository, init_project

init_project(".")
repo = Repository.open(".")
repo.add(["notes.txt"])
ref = repo.commit("First snapshot")
print(ref.display())
print(repo.status())
print(repo.info())
```

`Repository` also offers `remove`, `branch`, `list_branches`,
`create_branch`, `checkout` (with a `CheckoutMode`), `changed_files` and
`last_commit`. Errors are raised as `gust.errors.GustError` subclasses
(`UserError`, `ProjectParsingError`) or as `OSError`.

## What it does not do

gust has no merging, diffs, stashing, tags, remotes or network transfer.
`checkout` does not guess whether a name is a branch or a commit; the mode
must always be given.