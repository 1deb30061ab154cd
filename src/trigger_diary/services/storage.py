"""Local record store using TinyDB."""

from pathlib import Path
from typing import Optional, TypeVar

from tinydb import TinyDB
from tinydb.table import Table

from ..models.records import (
    DatedRecord,
    DietRecord,
    MenstrualRecord,
    RecordSet,
    SleepRecord,
    SymptomRecord,
)
from ..utils.config import Settings, get_settings

R = TypeVar("R", bound=DatedRecord)


class RecordStore:
    """
    Local storage for the four daily log kinds using TinyDB.

    Each kind lives in its own table of one JSON file in the data
    directory. Documents come back in insertion order, which is the
    "storage order" the flare-up window relies on.
    """

    SLEEP = "sleep"
    DIET = "diet"
    MENSTRUAL = "menstrual"
    SYMPTOMS = "symptoms"

    def __init__(self, settings: Optional[Settings] = None, db_path: Optional[Path] = None):
        self.settings = settings or get_settings()
        self._db_path = db_path
        self._db: Optional[TinyDB] = None

    @property
    def db_path(self) -> Path:
        """Path to the database file."""
        if self._db_path is not None:
            return self._db_path
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        return self.settings.data_dir / "records.json"

    @property
    def db(self) -> TinyDB:
        """Get the TinyDB instance."""
        if self._db is None:
            self._db = TinyDB(self.db_path)
        return self._db

    def _table(self, name: str) -> Table:
        return self.db.table(name)

    def _insert(self, name: str, record: R) -> R:
        doc = record.model_dump(mode="json", exclude={"id"})
        doc_id = self._table(name).insert(doc)
        return record.model_copy(update={"id": doc_id})

    def _all(self, name: str, model: type[R]) -> list[R]:
        # TinyDB returns documents ordered by doc_id
        return [
            model.model_validate({**doc, "id": doc.doc_id})
            for doc in self._table(name).all()
        ]

    def insert_sleep(self, record: SleepRecord) -> SleepRecord:
        return self._insert(self.SLEEP, record)

    def insert_diet(self, record: DietRecord) -> DietRecord:
        return self._insert(self.DIET, record)

    def insert_menstrual(self, record: MenstrualRecord) -> MenstrualRecord:
        return self._insert(self.MENSTRUAL, record)

    def insert_symptoms(self, record: SymptomRecord) -> SymptomRecord:
        return self._insert(self.SYMPTOMS, record)

    def get_all_sleep(self) -> list[SleepRecord]:
        return self._all(self.SLEEP, SleepRecord)

    def get_all_diet(self) -> list[DietRecord]:
        return self._all(self.DIET, DietRecord)

    def get_all_menstrual(self) -> list[MenstrualRecord]:
        return self._all(self.MENSTRUAL, MenstrualRecord)

    def get_all_symptoms(self) -> list[SymptomRecord]:
        return self._all(self.SYMPTOMS, SymptomRecord)

    def load_records(self) -> RecordSet:
        """Fetch every record of every kind."""
        return RecordSet(
            sleep=self.get_all_sleep(),
            diet=self.get_all_diet(),
            menstrual=self.get_all_menstrual(),
            symptoms=self.get_all_symptoms(),
        )

    def close(self) -> None:
        """Close the database connection."""
        if self._db:
            self._db.close()
            self._db = None

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()
