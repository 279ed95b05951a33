"""RecycleCatch - Game Info

Timed catch game: move the bin to catch recyclable products, avoid trash.
"""

NAME = "Recycle Catch"
DESCRIPTION = "Catch the recyclable products in the bin, dodge the trash. 40 seconds on the clock."
VERSION = "1.0.0"
AUTHOR = "Kiosk Team"

ARGUMENTS = [
    # Device class
    {
        'name': '--preset',
        'type': str,
        'default': 'auto',
        'choices': ['auto', 'desktop', 'mobile'],
        'help': 'Device preset: desktop, mobile, or auto (by screen width)'
    },

    # Rule overrides
    {
        'name': '--duration',
        'type': float,
        'default': None,
        'help': 'Run length in seconds (overrides config)'
    },
    {
        'name': '--spawn-interval',
        'type': float,
        'default': None,
        'help': 'Seconds between spawns (overrides config)'
    },
    {
        'name': '--recyclable-chance',
        'type': float,
        'default': None,
        'help': 'Probability that a spawn is recyclable (0.0-1.0)'
    },
    {
        'name': '--fall-speed',
        'type': float,
        'default': None,
        'help': 'Pixels per tick (overrides preset)'
    },
    {
        'name': '--penalty-per-wrong',
        'type': int,
        'default': None,
        'help': 'Points lost for catching trash'
    },
    {
        'name': '--seed',
        'type': int,
        'default': None,
        'help': 'Random seed for spawns and effects'
    },
]


def get_game_mode(**kwargs):
    """Factory function to create game instance."""
    import random
    from games.RecycleCatch.game_mode import RecycleCatchMode

    seed = kwargs.pop('seed', None)
    if seed is not None:
        kwargs['rng'] = random.Random(seed)
    return RecycleCatchMode(**kwargs)
