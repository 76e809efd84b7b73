RENDERING_PROGRESS = 0.1
SPOOLING_START = 0.2
SPOOLING_SPAN = 0.5
ASSEMBLING_PROGRESS = 0.8
DONE_PROGRESS = 1.0


def compute_spooling_progress(index: int, total: int) -> float:
    """Progress fraction while page ``index`` of ``total`` is being written.

    Interpolates linearly across the spooling band; stays below the
    assembling mark for every page.
    """
    if total <= 0:
        return SPOOLING_START
    index = min(max(index, 0), total)
    return SPOOLING_START + SPOOLING_SPAN * (index / total)
