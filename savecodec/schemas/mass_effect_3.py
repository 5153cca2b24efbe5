"""
Mass Effect 3 save layout (version 59).

The player, squad member and plot table layouts are large and live with the
caller; build_me3_save() splices them into the top-level record. Everything
else here is complete. Version marker and checksum footer are not part of the
body: the format generation adds them.

Usage:
    body = build_me3_save(player=PLAYER, henchman=HENCHMAN,
                          plot_table=PLOT_TABLE, me1_plot_table=ME1_PLOT_TABLE)
    generation = FormatGeneration("me3", ME3_SAVE_VERSION, body)
"""

from enum import IntEnum

from ..fields import (
    BOOL32,
    F32,
    I32,
    UNREAL_TEXT,
    Codec,
    Map,
    Padding,
    Record,
    Sequence,
    Variant,
)
from .common import (
    END_GAME_STATE,
    LEVEL,
    ROTATOR,
    SAVE_TIMESTAMP,
    STREAMING_RECORD,
    VECTOR,
    VECTOR_2D,
)


class Difficulty(IntEnum):
    NARRATIVE = 0
    CASUAL = 1
    NORMAL = 2
    HARDCORE = 3
    INSANITY = 4


class AutoReplyModeOptions(IntEnum):
    ALL_DECISIONS = 0
    MAJOR_DECISIONS = 1
    NO_DECISIONS = 2


class ObjectiveMarkerIconType(IntEnum):
    NONE = 0
    ATTACK = 1
    SUPPLY = 2
    ALERT = 3


DIFFICULTY = Variant(Difficulty)
AUTO_REPLY_MODE = Variant(AutoReplyModeOptions)
OBJECTIVE_MARKER_ICON = Variant(ObjectiveMarkerIconType)

PLANET = Record("Planet", [
    ("id", I32),
    ("visited", BOOL32),
    ("probes", Sequence(VECTOR_2D)),
    ("show_as_scanned", BOOL32),
])

SYSTEM = Record("System", [
    ("id", I32),
    ("reaper_alert_level", F32),
    ("reaper_detected", BOOL32),
])

GALAXY_MAP = Record("GalaxyMap", [
    ("planets", Sequence(PLANET)),
    ("systems", Sequence(SYSTEM)),
])

DEPENDENT_DLC = Record("DependentDlc", [
    ("id", I32),
    ("name", UNREAL_TEXT),
    ("canonical_name", UNREAL_TEXT),
])

LEVEL_TREASURE = Record("LevelTreasure", [
    ("level_name", UNREAL_TEXT),
    ("credits", I32),
    ("xp", I32),
    ("items", Sequence(UNREAL_TEXT)),
])

OBJECTIVE_MARKER = Record("ObjectiveMarker", [
    ("marker_owned_data", UNREAL_TEXT),
    ("marker_offset", VECTOR),
    ("marker_label", I32),
    ("bone_to_attach_to", UNREAL_TEXT),
    ("marker_icon_type", OBJECTIVE_MARKER_ICON),
])


def build_me3_save(player: Codec, henchman: Codec, plot_table: Codec, me1_plot_table: Codec) -> Record:
    """Top-level ME3 body with the caller's player, squad and plot layouts."""
    return Record("Me3SaveGame", [
        ("debug_name", UNREAL_TEXT),
        ("seconds_played", F32),
        ("disc", Padding(4)),
        ("base_level_name", UNREAL_TEXT),
        ("base_level_name_display_override_as_read", UNREAL_TEXT),
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
        ("placeables", Sequence(Padding(18))),
        ("pawns", Sequence(Padding(16))),
        ("player", player),
        ("squad", Sequence(henchman)),
        ("plot", plot_table),
        ("me1_plot", me1_plot_table),
        ("player_variables", Map(UNREAL_TEXT, I32)),
        ("galaxy_map", GALAXY_MAP),
        ("dependant_dlcs", Sequence(DEPENDENT_DLC)),
        ("treasures", Sequence(LEVEL_TREASURE)),
        ("use_modules", Sequence(Padding(16))),
        ("conversation_mode", AUTO_REPLY_MODE),
        ("objective_markers", Sequence(OBJECTIVE_MARKER)),
        ("saved_objective_text", Padding(4)),
    ])
