# commentapi

A small HTTP service that keeps comments in an SQLite database and exposes
them through a JSON REST interface built on Flask.

Each comment has four fields: `ID`, `Slug`, `Body` and `Author`. The `ID`
is a random UUID assigned by the service when a comment is created; any
`ID` sent in the request body is ignored.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
commentapi
```

The command takes no options besides `--help`. On start-up it prints
`Comment REST API`, opens the SQLite database file named by the `DB_TABLE`
environment variable (an in-memory database when it is unset or empty),
creates the `comments` table if it does not exist yet, and then serves on
`0.0.0.0:8080` with Flask's built-in server until interrupted (Ctrl+C).
The database connection is closed on the way out.

If the database cannot be opened or the table cannot be created, the error
is printed and the server does not start.

## Endpoints

Every response carries `Content-Type: application/json; charset=UTF-8`, and
every request is logged with its method and path.

| Method   | Path                   | What it does                          |
|----------|------------------------|---------------------------------------|
| any      | `/hello`               | Replies with `Hello World`            |
| `POST`   | `/api/v1/comment`      | Creates a comment from the JSON body  |
| `GET`    | `/api/v1/comment/<id>` | Returns the comment with that id      |
| `PUT`    | `/api/v1/comment/<id>` | Replaces slug, author and body        |
| `DELETE` | `/api/v1/comment/<id>` | Deletes the comment                   |

Creating a comment:

```
POST /api/v1/comment
{"Slug": "first-post", "Author": "Alice", "Body": "Hello, comment"}
```

The reply is the stored comment, including its new `ID`:

```
{"ID":"…","Slug":"first-post","Body":"Hello, comment","Author":"Alice"}
```

Details worth knowing:

- Field names in request bodies are matched without regard to case
  (`slug`, `Slug` and `SLUG` all work); unknown fields and `null` values
  are ignored.
- A body that is not valid JSON, is not an object, or holds a non-string
  field value gets an empty reply with status 200, and nothing is stored.
  The same happens when creating a comment fails.
- `GET` of an id that is not stored answers with status 500.
- `PUT` and `DELETE` of an id that is not stored still succeed: `PUT`
  echoes the comment back with that id, and nothing is changed.
- A failing update or delete answers with status 500.
- A successful delete answers with:

```
{"Message":"Successfull deleted"}
```

## Using the pieces from Python

The package is split into layers that can be used on their own:

- `commentapi.comment` holds the frozen `Comment` dataclass, the
  `CommentStore` protocol and `CommentService`, which wraps any store with
  `get_comment`, `post_comment`, `update_comment` and `delete_comment`. A
  failed lookup through the service raises `FetchingCommentError`.
- `commentapi.db` holds `Database`, a thread-safe store over an `sqlite3`
  connection with `ping`, `migrate` and `close` besides the four comment
  operations, and `connect(environ)`, which opens one from an environment
  mapping (`os.environ` by default). Database failures raise
  `DatabaseError`.
- `commentapi.transport` holds `Handler`, which maps the routes above onto
  a comment service. Its Flask application is `Handler.app`, usable with
  Flask's test client or any WSGI server; `Handler.serve()` runs it on
  `Handler.host` and `Handler.port`.
- `commentapi.server` holds `run(environ)`, which wires everything together,
  and `main(argv)`, the entry point behind the `commentapi` command.

```python
from commentapi.comment import Comment, CommentService
from commentapi.db import connect

db = connect({"DB_TABLE": "comments.sqlite3"})
db.migrate()
service = CommentService(db)
created = service.post_comment(Comment(slug="first-post", author="Alice", body="Hi"))
print(service.get_comment(created.id))
db.close()
```

## What it does not do

- Storage is SQLite only. No other database server is supported, and no
  host, port, user or password settings are read; `DB_TABLE` is the only
  setting used.
- The schema is a single `comments` table created on start-up; there are
  no versioned migrations.
- The server is Flask's development server with a fixed address; there is
  no option to change the host or port from the command line, and no
  authentication.