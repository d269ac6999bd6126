# knotter

Knotter works with a shared globe that many people can place balls on. A ball is
either fixed to the surface, or it moves with an impulse. Each globe has a name such
as `dapa22ravo`. Every change to a globe is a transaction, and clients poll for the
transactions they have not seen yet.

This package holds the wire data types, an HTTP client for a globe API server, and
the client-side logic that has no rendering in it: syncing received balls, turning
a dragged speed marker into an impulse, and camera orbit and zoom arithmetic.

## Installation

```
pip install .
```

To run the tests, install the test extra as well:

```
pip install ".[test]"
pytest
```

## Modules

- `knotter.dtos` holds the JSON messages: `PositionDto`, `ImpulseDto`, `BallDto`
  (also available as `InsertBallDto`), `BallTransactionDto`,
  `GetBallTransactionsByGlobeIdResponseDto`, `GetNewGlobeIdResponse`,
  `HealthResponse` and `InsertBallResponseDto`. Each message has a `to_dict` method.
  All of them except `HealthResponse` also have a `from_dict` class method.
  `BallDto` also has `to_json` and `from_json`. Parsing raises `ValueError` when a
  field is missing or has the wrong type.
- `knotter.entities` holds the stored form of a ball: `BallEntity`, `PositionEntity`
  and `ImpulseEntity`. `BallEntity.new(uuid, is_insert)` builds a bare entry.
  `PositionEntity.distance_squared` gives the squared distance to another position.
- `knotter.mapping` converts between the two forms with `dto_to_entity` and
  `entity_to_dto`.
- `knotter.api_client` provides `build_url` and `ApiClient`.
- `knotter.web_location` provides `get_query_param`, `extract_until_question_mark`
  and `globe_url`. Together they read a globe name from a page URL and build the
  URL that opens a globe.
- `knotter.ball_sync` handles received transactions:
  - `partition_transactions` splits a batch into the UUIDs to insert and the UUIDs
    to delete.
  - `plan_insertions` returns the `PlacedBall`s to spawn. A moving ball that would
    overlap another ball is moved to a free random spot on the unit sphere.
  - `build_insert_ball_dto` builds the insert message for a ball the user placed.
  - `color_to_hex` and `hex_to_rgba` convert between colour channels in the range
    0 to 1 and `#RRGGBBAA` strings.
- `knotter.ball_edit` handles placing a ball:
  - `speed_marker` builds the `SpeedMarker` capsule between the ball and the
    pointer. The capsule is at most 0.5 long.
  - `impulse_from_marker` returns the impulse the marker gives, or `None` when the
    ball stays fixed.
  - `restore_speed` rescales a velocity after a bounce.
  - `next_delete_state` switches into and out of delete mode.
- `knotter.camera` holds the `AppState` enum and `TouchCameraConfig`. It works out
  state changes with `next_orbit_state`, clamps the pitch with
  `clamp_keyboard_pitch_change` and `clamp_touch_pitch_change`, and zooms with
  `keyboard_zoom` and `pinch_zoom`.

## Talking to a server

`ApiClient` sends requests to these paths under the API URL:

| Method | Path | Used by |
|--------|------|---------|
| `POST` | `/<globe_id>` | `insert_ball`, with the ball as JSON |
| `DELETE` | `/<globe_id>/<uuid>` | `delete_ball` |
| `GET` | `/<globe_id>/<transaction_id>` | `fetch_transactions` |
| `GET` | `/new_globe_id` | `request_new_globe_id` |

```python
from knotter.api_client import ApiClient

client = ApiClient("http://localhost:8080", "dapa22ravo")
for transaction in client.fetch_transactions():
    print(transaction.transaction_id, transaction.ball_dto.uuid)
```

`fetch_transactions` asks for the transactions after the last one it received. It
starts from `0`. If the client has no globe yet, `fetch_transactions` asks the
server for a new globe id, switches to it and returns an empty list.
`insert_ball` and `delete_ball` send nothing and return `None` while no globe is
selected.

## What this package does not do

The package has no server, no storage for the transaction log and no checks on
inserts or deletes. It does not draw anything. `ApiClient` needs a globe API server
to talk to, and that server is not part of this package. There is no command to run.