"""Event-level owner of tracks and their hierarchy bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .geometry import FieldLookup
from .logger import logger
from .models import TrackParameters
from .status import StatusCode
from .track import Track


@dataclass
class TrackPool:
    """Create, own and release the tracks of one event.

    Tracks only hold non-owning references to each other; the pool decides
    when a track goes away and unlinks it from the tracks it still owns.
    """

    field_lookup: FieldLookup
    _tracks: dict[Track, None] = field(default_factory=dict, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(tuple(self._tracks))

    def __contains__(self, track: object) -> bool:
        return track in self._tracks

    @property
    def tracks(self) -> tuple[Track, ...]:
        """Owned tracks in creation order."""
        return tuple(self._tracks)

    def available_tracks(self) -> list[Track]:
        """Tracks not yet consumed by a particle-flow object."""
        return [t for t in self._tracks if t.is_available]

    def create_track(self, parameters: TrackParameters) -> Track:
        """Build a track and take ownership; failures register nothing."""
        track = Track(parameters, self.field_lookup)
        self._tracks[track] = None
        logger.debug("Created %r (%d tracks in pool)", track, len(self._tracks))
        return track

    def set_parent_daughter_relationship(self, parent: Track, daughter: Track) -> StatusCode:
        """Link `parent` and `daughter` in both directions.

        Returns `NOT_FOUND` if either track is foreign to the pool and
        `ALREADY_PRESENT` if either side already holds the link; in both
        cases neither track changes. A track may be its own parent.
        """
        if parent not in self._tracks or daughter not in self._tracks:
            logger.debug("Parent-daughter link %r -> %r names a foreign track", parent, daughter)
            return StatusCode.NOT_FOUND
        if daughter in parent.daughter_tracks or parent in daughter.parent_tracks:
            logger.debug("Parent-daughter link %r -> %r already present", parent, daughter)
            return StatusCode.ALREADY_PRESENT
        status = parent.add_daughter(daughter)
        if status.is_success:
            status = daughter.add_parent(parent)
        return status

    def set_sibling_relationship(self, first: Track, second: Track) -> StatusCode:
        """Mark two distinct tracks as siblings of each other.

        Returns `INVALID_PARAMETER` when both arguments are the same track,
        `NOT_FOUND` for foreign tracks and `ALREADY_PRESENT` when either side
        already holds the link. Failures leave both tracks unchanged.
        """
        if first is second:
            logger.debug("Sibling link of %r to itself rejected", first)
            return StatusCode.INVALID_PARAMETER
        if first not in self._tracks or second not in self._tracks:
            logger.debug("Sibling link %r <-> %r names a foreign track", first, second)
            return StatusCode.NOT_FOUND
        if second in first.sibling_tracks or first in second.sibling_tracks:
            logger.debug("Sibling link %r <-> %r already present", first, second)
            return StatusCode.ALREADY_PRESENT
        status = first.add_sibling(second)
        if status.is_success:
            status = second.add_sibling(first)
        return status

    def delete_track(self, track: Track) -> StatusCode:
        """Release a track and remove every reference the pool's tracks hold to it."""
        if track not in self._tracks:
            logger.debug("Cannot delete %r: not owned by this pool", track)
            return StatusCode.NOT_FOUND
        del self._tracks[track]
        for other in self._tracks:
            other.unlink(track)
        track.release()
        logger.debug("Deleted %r (%d tracks in pool)", track, len(self._tracks))
        return StatusCode.SUCCESS

    def reset(self) -> None:
        """Release every owned track and empty the pool."""
        for track in self._tracks:
            track.release()
        logger.debug("Reset pool, released %d tracks", len(self._tracks))
        self._tracks.clear()
