"""Graphics collaborator interface.

Rendering lives outside this package. A person only tells its graphics object
that some part of its state changed; return values are never used.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NodeGraphics(Protocol):
    """Redraw notifications a person node sends to its renderer."""

    def update_name_label(self) -> None: ...

    def update_number_label(self) -> None: ...

    def update_external_id_label(self) -> None: ...

    def update_age_label(self) -> None: ...

    def update_comments_label(self) -> None: ...

    def update_sb_label(self) -> None: ...

    def update_life_status_shapes(self, old_status: str) -> None: ...

    def update_disorder_shapes(self) -> None: ...

    def update_carrier_graphic(self) -> None: ...

    def update_cancer_age_of_onset_labels(self) -> None: ...

    def update_childless_shapes(self) -> None: ...

    def update_childless_status_label(self) -> None: ...

    def update_evaluation_label(self) -> None: ...

    def update_gender_shapes(self) -> None: ...

    def update_adopted_shape(self) -> None: ...

    def regenerate_handles(self) -> None: ...

    def regenerate_buttons(self) -> None: ...

    def remove(self) -> None: ...


class NullGraphics:
    """Graphics that draw nothing; used for headless pedigrees."""

    def update_name_label(self) -> None:
        pass

    def update_number_label(self) -> None:
        pass

    def update_external_id_label(self) -> None:
        pass

    def update_age_label(self) -> None:
        pass

    def update_comments_label(self) -> None:
        pass

    def update_sb_label(self) -> None:
        pass

    def update_life_status_shapes(self, old_status: str) -> None:
        pass

    def update_disorder_shapes(self) -> None:
        pass

    def update_carrier_graphic(self) -> None:
        pass

    def update_cancer_age_of_onset_labels(self) -> None:
        pass

    def update_childless_shapes(self) -> None:
        pass

    def update_childless_status_label(self) -> None:
        pass

    def update_evaluation_label(self) -> None:
        pass

    def update_gender_shapes(self) -> None:
        pass

    def update_adopted_shape(self) -> None:
        pass

    def regenerate_handles(self) -> None:
        pass

    def regenerate_buttons(self) -> None:
        pass

    def remove(self) -> None:
        pass
