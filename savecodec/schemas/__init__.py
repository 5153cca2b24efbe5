# Per-title save layouts (declarative data)
from . import common, mass_effect_2, mass_effect_3
from .mass_effect_2 import build_me2_save
from .mass_effect_3 import build_me3_save
