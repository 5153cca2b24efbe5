"""
Mass Effect 2 save layout (version 29).

Same composition rules as mass_effect_3: sub-layouts not modeled here are
passed to build_me2_save(). The galaxy map is one of them: its ME2 layout
differs from ME3's.
"""

from enum import IntEnum

from ..fields import F32, I32, UNREAL_TEXT, Codec, Padding, Record, Sequence, Variant
from .common import (
    END_GAME_STATE,
    LEVEL,
    ROTATOR,
    SAVE_TIMESTAMP,
    STREAMING_RECORD,
    VECTOR,
)


class Difficulty(IntEnum):
    CASUAL = 0
    NORMAL = 1
    VETERAN = 2
    HARDCORE = 3
    INSANITY = 4


DIFFICULTY = Variant(Difficulty)

DEPENDENT_DLC = Record("DependentDlc", [
    ("id", I32),
    ("name", UNREAL_TEXT),
])


def build_me2_save(player: Codec, henchman: Codec, plot_table: Codec,
                   me1_plot_table: Codec, galaxy_map: Codec) -> Record:
    """Top-level ME2 body with the caller's player, squad, plot and galaxy map layouts."""
    return Record("Me2SaveGame", [
        ("debug_name", Sequence(Padding(1))),
        ("seconds_played", F32),
        ("disc", Padding(4)),
        ("base_level_name", UNREAL_TEXT),
        ("difficulty", DIFFICULTY),
        ("end_game_state", END_GAME_STATE),
        ("timestamp", SAVE_TIMESTAMP),
        ("location", VECTOR),
        ("rotation", ROTATOR),
        ("current_loading_tip", Padding(4)),
        ("levels", Sequence(LEVEL)),
        ("streaming_records", Sequence(STREAMING_RECORD)),
        ("kismet_records", Sequence(Padding(20))),
        ("doors", Sequence(Padding(18))),
        ("pawns", Sequence(Padding(16))),
        ("player", player),
        ("squad", Sequence(henchman)),
        ("plot", plot_table),
        ("me1_plot", me1_plot_table),
        ("galaxy_map", galaxy_map),
        ("dependant_dlcs", Sequence(DEPENDENT_DLC)),
    ])
