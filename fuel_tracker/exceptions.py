"""
Exceptions metier / Domain exceptions.

Les derivations ne levent jamais : une derivation impossible retourne None.
Derivations never raise: a derivation that cannot run returns None.
"""


class FuelTrackerError(Exception):
    """Erreur de base / Base error."""


class FormValidationError(FuelTrackerError):
    """Champs obligatoires manquants ou invalides / Missing or malformed required fields."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("Invalid fields: " + ", ".join(sorted(errors)))


class PersistenceError(FuelTrackerError):
    """Echec du record store / Record store operation failed."""


class RecordNotFoundError(PersistenceError):
    """Enregistrement absent ou hors proprietaire / Record missing or owned by someone else."""

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class UnauthenticatedError(FuelTrackerError):
    """Operation de persistance sans proprietaire / Persistence attempted without an owner."""


class SubmissionInProgressError(FuelTrackerError):
    """Soumission deja en cours / A submit is already in flight for this form."""
