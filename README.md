# killchime

killchime is a small HTTP server that receives Counter-Strike 2 game state
integration (GSI) updates and plays a sound from a sound pack each time the
player gets a kill. Multi-kills pick a higher-numbered sound, and headshots
can add their own effect. Audio is played through pygame's mixer.

## Installation

```
pip install .
```

## Setting up the game

Add a GSI config file to the game's `cfg` directory, for example
`gamestate_integration_killchime.cfg`, that posts to
`http://127.0.0.1:3000`. The updates must carry `map` and `player` data,
including the player's `steamid`, `name` and `state` (with `round_kills`
and `round_killhs`).

## Sound packs

Sound packs live under `sounds/<preset>/` in the directory you run the
program from. Each holds an `info.json`; every field is required, the flags
are booleans and `start`/`end` are integers from 0 to 65535:

```json
{
  "has_variant": false,
  "has_voice": true,
  "has_common": true,
  "has_headshot": false,
  "has_common_headshot": false,
  "start": 1,
  "end": 5
}
```

and the matching files: `1.wav` … `<end>.wav`, plus `common.wav`,
`common_headshot.wav` and `headshot.wav` where the flags ask for them.
When the preset has `has_variant` set and `--variant` is given, the
numbered and `headshot.wav` voice files are taken from
`sounds/<preset>_v_<variant>/` instead. A kill count above `end` plays
`<end>.wav`.

## Running

```
killchime --preset crossfire
```

Options:

- `-d, --device NAME`: output device (default `default`); an unknown name
  falls back to the default device with a warning
- `-l, --list-devices`: log the output device names, then exit
- `-n, --no-voice`: turn off voice lines for presets that have them
- `-p, --preset NAME`: sound preset (default `crossfire`)
- `--steamid ID`: play sounds only for this Steam ID
- `--variant NAME`: use a variant of the preset
- `-v, --volume FLOAT`: playback volume (default `1.0`, clamped to 0–1)
- `-V, --version`: print the version and exit

The server listens on `127.0.0.1:3000` for `POST /` and stops on Ctrl+C or
SIGTERM. It answers `200` to every well-formed update, `400` to a body that
is not JSON, `422` to JSON of the wrong shape, and `408` when a request takes
longer than 10 seconds. Set the `KILLCHIME_LOG` environment variable to a
logging level name (for example `DEBUG` or `WARNING`) to change how much it
logs; the default is `INFO`.

## Use from Python

```python
from killchime.args import parse_args
from killchime.preset import load_preset
from killchime.state import AppState
from killchime.handler import evaluate

args = parse_args(["--preset", "crossfire"])
preset = load_preset(args.preset, "sounds")
state = AppState(args=args, preset=preset)

event = evaluate(state, {
    "map": {},
    "player": {
        "steamid": "76561190000000000",
        "name": "player",
        "state": {"round_kills": 1, "round_killhs": 0},
    },
})
```

- `killchime.preset.load_preset(name, root)` reads `<root>/<name>/info.json`
  into a `Preset`, raising `PresetError` when it is missing or malformed.
- `killchime.handler.evaluate(state, body)` updates the kill counters kept
  in the `AppState` and returns a `KillEvent` when a new kill should be
  announced, otherwise `None`.
- `killchime.sound.sound_files(...)` returns the sound files to mix for a
  kill, and `killchime.sound.play_audio(...)` plays them on the state's
  `OutputStream`.
- `killchime.playback.get_output_stream(name)` opens an `OutputStream`, and
  `killchime.playback.list_host_devices()` returns the device names.
- `killchime.app.create_app(state)` builds the aiohttp application, and
  `killchime.app.serve(state, host, port)` runs it until interrupted.