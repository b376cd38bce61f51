"""In-memory garment catalog, selection and color-variation cache.

Garments are identified by content (see ``Image``), so a color swap changes
an item's identity. The store keeps the catalog and the selection in step
when that happens and decides when a palette must be (re)generated.

State is only changed through ``upload``, ``toggle_select``, ``swap`` and
the palette protocol (``sync_palette`` / ``apply_palette``). Readers get
tuple snapshots. None of the entry points raise.
"""

import logging

from ..models import Image

logger = logging.getLogger(__name__)


class IdentitySyncStore:
    """Owns the garment catalog, the selection and the variation cache."""

    def __init__(self):
        self._catalog: list[Image] = []
        self._selection: list[Image] = []
        self._last_processed: Image | None = None
        self._palette: list[Image] = []

    @property
    def catalog(self) -> tuple[Image, ...]:
        return tuple(self._catalog)

    @property
    def selection(self) -> tuple[Image, ...]:
        return tuple(self._selection)

    @property
    def palette(self) -> tuple[Image, ...]:
        return tuple(self._palette)

    @property
    def last_processed(self) -> Image | None:
        """Garment the cached palette belongs to (or is being generated for)."""
        return self._last_processed

    @property
    def single_selected(self) -> Image | None:
        """The selected garment when exactly one is selected, else None."""
        if len(self._selection) == 1:
            return self._selection[0]
        return None

    def upload(self, images: list[Image]) -> int:
        """Append garments to the catalog. Returns how many were added."""
        self._catalog.extend(images)
        return len(images)

    def toggle_select(self, identity: Image) -> bool:
        """Add ``identity`` to the selection, or remove it if present.

        Identities that are not in the catalog are ignored.

        Returns:
            True if the garment is selected after the call
        """
        if identity in self._selection:
            self._selection = [item for item in self._selection if item != identity]
            return False
        if identity not in self._catalog:
            logger.debug("Ignoring toggle for unknown garment %s", identity.digest)
            return False
        self._selection.append(identity)
        return True

    def swap(self, old: Image, new: Image) -> bool:
        """Replace every occurrence of ``old`` with ``new``.

        Catalog and selection are rebuilt first and assigned together, so no
        reader can see one updated without the other. If ``old`` is the
        garment the palette was computed for, the cache is re-keyed to
        ``new``: accepting a variant does not trigger a fresh palette.

        Returns:
            False when nothing was swapped
        """
        if old == new or old not in self._catalog:
            return False

        catalog = [new if item == old else item for item in self._catalog]
        selection: list[Image] = []
        for item in self._selection:
            item = new if item == old else item
            # Selection matches by content, so swapping onto an already
            # selected garment merges the two entries.
            if item not in selection:
                selection.append(item)

        self._catalog, self._selection = catalog, selection
        if self._last_processed == old:
            self._last_processed = new

        logger.info("Swapped garment %s -> %s", old.digest, new.digest)
        return True

    def sync_palette(self) -> Image | None:
        """Apply the cache-invalidation rule to the current selection.

        With zero or several garments selected the cache is cleared. With a
        single garment different from the one last processed, the palette is
        discarded and that garment is returned as needing generation.

        Returns:
            The garment to generate a palette for, or None
        """
        current = self.single_selected
        if current is None:
            self._last_processed = None
            self._palette = []
            return None

        if current == self._last_processed:
            return None

        self._last_processed = current
        self._palette = []
        return current

    def apply_palette(self, identity: Image, palette: list[Image]) -> bool:
        """Install a palette generated for ``identity`` unless it is stale.

        Returns:
            False if the selection moved on and the palette was discarded
        """
        if identity != self._last_processed or identity != self.single_selected:
            logger.info("Discarding stale palette for garment %s", identity.digest)
            return False

        self._palette = list(palette)
        return True
