"""Routes for inserting and listing daily records."""

from fastapi import APIRouter, Depends

from ...models.records import DietRecord, MenstrualRecord, SleepRecord, SymptomRecord
from ...services.storage import RecordStore
from ..dependencies import get_store

router = APIRouter()


@router.post("/insert_sleep", response_model=SleepRecord)
def insert_sleep(record: SleepRecord, store: RecordStore = Depends(get_store)):
    """Store one night of sleep."""
    return store.insert_sleep(record)


@router.post("/insert_diet", response_model=DietRecord)
def insert_diet(record: DietRecord, store: RecordStore = Depends(get_store)):
    """Store one meal."""
    return store.insert_diet(record)


@router.post("/insert_menstrual", response_model=MenstrualRecord)
def insert_menstrual(record: MenstrualRecord, store: RecordStore = Depends(get_store)):
    """Store one menstrual observation."""
    return store.insert_menstrual(record)


@router.post("/insert_symptoms", response_model=SymptomRecord)
def insert_symptoms(record: SymptomRecord, store: RecordStore = Depends(get_store)):
    """Store one day's symptom ratings."""
    return store.insert_symptoms(record)


@router.get("/get_all_sleep", response_model=list[SleepRecord])
def get_all_sleep(store: RecordStore = Depends(get_store)):
    return store.get_all_sleep()


@router.get("/get_all_diet", response_model=list[DietRecord])
def get_all_diet(store: RecordStore = Depends(get_store)):
    return store.get_all_diet()


@router.get("/get_all_menstrual", response_model=list[MenstrualRecord])
def get_all_menstrual(store: RecordStore = Depends(get_store)):
    return store.get_all_menstrual()


@router.get("/get_all_symptoms", response_model=list[SymptomRecord])
def get_all_symptoms(store: RecordStore = Depends(get_store)):
    return store.get_all_symptoms()
