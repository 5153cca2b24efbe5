"""
Shared save layouts.

Records and enumerations that appear in more than one title. Strings use
the engine's signed-length convention and booleans are 4-byte UBOOLs.
"""

from enum import IntEnum

from ..fields import BOOL32, F32, I32, UNREAL_TEXT, Record, Variant


class EndGameState(IntEnum):
    NOT_FINISHED = 0
    OUT_IN_A_BLAZE_OF_GLORY = 1
    LIVED_TO_FIGHT_AGAIN = 2


END_GAME_STATE = Variant(EndGameState)

SAVE_TIMESTAMP = Record("SaveTimeStamp", [
    ("seconds_since_midnight", I32),
    ("day", I32),
    ("month", I32),
    ("year", I32),
])

VECTOR = Record("Vector", [
    ("x", F32),
    ("y", F32),
    ("z", F32),
])

VECTOR_2D = Record("Vector2d", [
    ("x", F32),
    ("y", F32),
])

ROTATOR = Record("Rotator", [
    ("pitch", I32),
    ("yaw", I32),
    ("roll", I32),
])

LEVEL = Record("Level", [
    ("name", UNREAL_TEXT),
    ("should_be_loaded", BOOL32),
    ("should_be_visible", BOOL32),
])

STREAMING_RECORD = Record("StreamingRecord", [
    ("name", UNREAL_TEXT),
    ("is_active", BOOL32),
])
