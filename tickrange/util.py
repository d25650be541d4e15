"""Tick resolution constants for tickrange.

Note values assume the common MIDI resolution of 480 ticks per quarter note
and a 4/4 bar. Sequences recorded at another resolution should scale from
``TICKS_PER_QUARTER`` rather than use these directly.
"""

TICK = 1
TICKS_PER_QUARTER = 480

SIXTEENTH = TICKS_PER_QUARTER // 4
EIGHTH = TICKS_PER_QUARTER // 2
QUARTER = TICKS_PER_QUARTER
HALF = TICKS_PER_QUARTER * 2
WHOLE = TICKS_PER_QUARTER * 4
BAR = WHOLE
