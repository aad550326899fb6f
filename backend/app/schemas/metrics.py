from pydantic import BaseModel, ConfigDict


class StageCountsOut(BaseModel):
    total: int
    applied: int
    interviewing: int
    offered: int
    rejected: int

    model_config = ConfigDict(from_attributes=True)


class PhaseAveragesOut(BaseModel):
    """Average phase durations in fractional days; 0.0 when no application qualifies."""

    applied_to_interview: float
    interview_to_offer: float
    offer_to_rejected: float

    model_config = ConfigDict(from_attributes=True)


class PhaseSamplesOut(BaseModel):
    applied_to_interview: int
    interview_to_offer: int
    offer_to_rejected: int

    model_config = ConfigDict(from_attributes=True)


class ApplicationMetricsOut(BaseModel):
    counts: StageCountsOut
    averages: PhaseAveragesOut
    samples: PhaseSamplesOut

    model_config = ConfigDict(from_attributes=True)


class TimelineOut(BaseModel):
    averages: PhaseAveragesOut
