"""ViewModel for the selfie list: loading, creating, renaming, deleting."""

from __future__ import annotations

from PIL import Image
from loguru import logger

from app.viewmodels.selfie_vm import SelfieVM
from core.models import Coordinate, Selfie
from core.services.interfaces import ISelfieStore, SelfieStoreError
from core.services.sort_service import SortService


class MainVM:
    """Main application view-model.

    Mediates between the store and the list screen. Store failures become a
    user-facing message in `last_error`; the view-model keeps working.
    """

    def __init__(
        self,
        store: ISelfieStore,
        sorter: SortService | None = None,
        default_sort: list[tuple[str, bool]] | None = None,
        new_title: str = "New Selfie",
    ) -> None:
        """Create a MainVM.

        Args:
            store: The single store instance built at startup.
            sorter: Sorting service (defaults to `SortService`).
            default_sort: List of (field_name, ascending); newest first if omitted.
            new_title: Title given to freshly created selfies.
        """
        self._store = store
        self._sorter = sorter or SortService()
        self._default_sort = default_sort or [("created", False)]
        self._new_title = new_title
        self.selfies: list[Selfie] = []
        self.last_error: str | None = None

    def _fail(self, message: str) -> None:
        self.last_error = message
        logger.warning(message)

    def load_selfies(self) -> bool:
        """Load every selfie from the store, newest first by default."""
        self.last_error = None
        try:
            loaded = self._store.list_selfies()
        except (SelfieStoreError, OSError) as ex:
            self.selfies = []
            self._fail(f"Failed to load selfies: {ex}")
            return False
        self.selfies = self._sorter.sort(loaded, self._default_sort)
        logger.info("Loaded {} selfies", len(self.selfies))
        return True

    def create_selfie(
        self, image: Image.Image, position: Coordinate | None = None
    ) -> Selfie | None:
        """Store a new selfie for `image` and put it at the top of the list."""
        self.last_error = None
        selfie = Selfie(title=self._new_title, position=position)
        try:
            self._store.save(selfie)
        except (SelfieStoreError, OSError, ValueError) as ex:
            self._fail(f"Can't save photo: {ex}")
            return None
        try:
            self._store.set_image(selfie.id, image)
        except (SelfieStoreError, OSError) as ex:
            # Drop the metadata written above so no imageless entry is left
            try:
                self._store.delete(selfie.id)
            except OSError as cleanup_ex:
                logger.error("Rollback of {} failed: {}", selfie.id, cleanup_ex)
            self._fail(f"Can't save photo: {ex}")
            return None
        self.selfies.insert(0, selfie)
        return selfie

    def rename(self, index: int, title: str) -> bool:
        """Change the title of the selfie at `index` and save it."""
        self.last_error = None
        selfie = self.selfies[index]
        old_title = selfie.title
        selfie.title = title
        try:
            self._store.save(selfie)
        except (SelfieStoreError, OSError, ValueError) as ex:
            selfie.title = old_title
            logger.debug("Rename failed: {}", ex)
            self._fail(f"Failed to rename {old_title}.")
            return False
        return True

    def delete_at(self, index: int) -> bool:
        """Delete the selfie at `index` from the store and the list."""
        self.last_error = None
        selfie = self.selfies[index]
        try:
            self._store.delete(selfie)
        except (SelfieStoreError, OSError) as ex:
            logger.debug("Delete failed: {}", ex)
            self._fail(f"Failed to delete {selfie.title}.")
            return False
        del self.selfies[index]
        return True

    @property
    def items(self) -> list[SelfieVM]:
        """Row view-models for the current list."""
        return [SelfieVM(selfie=s, store=self._store) for s in self.selfies]

    @property
    def selfie_count(self) -> int:
        """Number of selfies currently loaded."""
        return len(self.selfies)
