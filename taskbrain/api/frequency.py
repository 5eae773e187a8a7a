from fastapi import APIRouter, HTTPException
from taskbrain.core.frequency import (
    InvalidDateError,
    next_occurrence,
    normalize_frequency,
    FREQUENCY_TO_DB,
)
from taskbrain.domain.models.dtos import (
    NextOccurrenceRequest,
    NextOccurrenceResponse,
    NormalizeRequest,
    NormalizeResponse,
)

router = APIRouter(prefix="/frequency", tags=["Frequency"])


@router.post("/normalize", response_model=NormalizeResponse)
def normalize(body: NormalizeRequest):
    frequency = normalize_frequency(body.label)
    return NormalizeResponse(label=body.label, frequency=frequency, db_value=FREQUENCY_TO_DB[frequency])

@router.post("/next-occurrence", response_model=NextOccurrenceResponse)
def compute_next_occurrence(body: NextOccurrenceRequest):
    frequency = normalize_frequency(body.frequency)
    try:
        occurrence = next_occurrence(frequency, body.start_date, body.from_date)
    except InvalidDateError as e:
        raise HTTPException(400, str(e))
    return NextOccurrenceResponse(frequency=frequency, next_occurrence=occurrence)
