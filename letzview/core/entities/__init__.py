"""
Business entities representing core domain concepts.

Entities are mutable objects with identity. The catalog tree is only ever
mutated on a deep copy owned by the CatalogStore, never in place on the
tree currently visible to readers.

Exports:
- Series: A show, containing ordered Seasons
- Season: A numbered grouping of Episodes
- Episode: A single playable unit with its media references
- AudioTrack / SubtitleTrack: Alternate tracks of an Episode
"""

from letzview.core.entities.catalog import (
    AudioTrack,
    Episode,
    Season,
    Series,
    SubtitleTrack,
    drop_incomplete_tracks,
    next_episode_number,
    next_season_number,
    sort_tree,
)

__all__ = [
    "AudioTrack",
    "Episode",
    "Season",
    "Series",
    "SubtitleTrack",
    "drop_incomplete_tracks",
    "next_episode_number",
    "next_season_number",
    "sort_tree",
]
