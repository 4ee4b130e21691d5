"""
Pydantic schemas for API request/response validation.

Create and update bodies use the record field names of the store models;
responses mirror each model's ``to_dict()`` output, so timestamps travel
as ISO strings.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


Priority = Literal[
    "urgent-important",
    "urgent-not-important",
    "not-urgent-important",
    "not-urgent-not-important",
]
TaskStatus = Literal["pending", "in-progress", "completed"]
Mood = Literal["very-sad", "sad", "neutral", "happy", "very-happy"]
SessionType = Literal["work", "break", "long-break"]


# =============================================================================
# Base Response Schemas
# =============================================================================

class AgentResponseSchema(BaseModel):
    """Standard response from any agent operation."""
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[str]] = None

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    """Error response for API errors."""
    detail: str


# =============================================================================
# Task Schemas
# =============================================================================

class TaskStepSchema(BaseModel):
    """One step of a decomposed task."""
    id: str = ""
    title: str = Field(..., min_length=1)
    estimated_minutes: int = Field(default=5, ge=1)
    completed: bool = False
    completed_at: Optional[datetime] = None


class TaskCreate(BaseModel):
    """Request body for creating a task."""
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    priority: Priority = "not-urgent-important"
    status: TaskStatus = "pending"
    estimated_minutes: Optional[int] = Field(default=None, ge=0)
    actual_minutes: Optional[int] = Field(default=None, ge=0)
    steps: List[TaskStepSchema] = []
    current_step_index: int = Field(default=0, ge=0)
    minimal_viable_task: Optional[str] = None
    emotional_state: Optional[str] = None


class TaskUpdate(BaseModel):
    """Request body for updating a task (only set fields are applied)."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    priority: Optional[Priority] = None
    status: Optional[TaskStatus] = None
    estimated_minutes: Optional[int] = Field(default=None, ge=0)
    actual_minutes: Optional[int] = Field(default=None, ge=0)
    steps: Optional[List[TaskStepSchema]] = None
    current_step_index: Optional[int] = Field(default=None, ge=0)
    minimal_viable_task: Optional[str] = None
    emotional_state: Optional[str] = None


class TaskResponse(BaseModel):
    """Task data returned from API."""
    id: int
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None
    steps: List[Dict[str, Any]] = []
    current_step_index: int = 0
    minimal_viable_task: Optional[str] = None
    emotional_state: Optional[str] = None
    created_at: str
    completed_at: Optional[str] = None

    class Config:
        from_attributes = True


# =============================================================================
# Mood Schemas
# =============================================================================

class MoodEntryCreate(BaseModel):
    """Request body for logging a mood."""
    mood: Mood
    emotional_state: Optional[str] = None
    triggers: List[str] = []
    notes: Optional[str] = None


class MoodEntryResponse(BaseModel):
    id: int
    mood: str
    emotional_state: Optional[str] = None
    triggers: List[str] = []
    notes: Optional[str] = None
    timestamp: str

    class Config:
        from_attributes = True


# =============================================================================
# Focus Session Schemas
# =============================================================================

class FocusSessionCreate(BaseModel):
    """Request body for starting or logging a focus session."""
    task_id: Optional[int] = None
    duration: int = Field(default=25, ge=1)
    type: SessionType = "work"
    completed: bool = False


class FocusSessionUpdate(BaseModel):
    task_id: Optional[int] = None
    duration: Optional[int] = Field(default=None, ge=1)
    type: Optional[SessionType] = None
    completed: Optional[bool] = None


class FocusSessionResponse(BaseModel):
    id: int
    task_id: Optional[int] = None
    duration: int
    type: str
    completed: bool
    started_at: str
    completed_at: Optional[str] = None

    class Config:
        from_attributes = True


# =============================================================================
# Routine Block Schemas
# =============================================================================

class RoutineBlockCreate(BaseModel):
    """Request body for adding a block to the weekly routine board."""
    day_of_week: int = Field(..., ge=0, le=6)
    start_hour: int = Field(..., ge=0, le=23)
    end_hour: int = Field(..., ge=1, le=24)
    activity: str = Field(..., min_length=1)
    color: str = "blue"
    completed: bool = False
    week_of: datetime


class RoutineBlockUpdate(BaseModel):
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    start_hour: Optional[int] = Field(default=None, ge=0, le=23)
    end_hour: Optional[int] = Field(default=None, ge=1, le=24)
    activity: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    completed: Optional[bool] = None
    week_of: Optional[datetime] = None


class RoutineBlockResponse(BaseModel):
    id: int
    day_of_week: int
    start_hour: int
    end_hour: int
    activity: str
    color: str
    completed: bool
    week_of: str

    class Config:
        from_attributes = True


# =============================================================================
# Cognitive Reframe Schemas
# =============================================================================

class CognitiveReframeCreate(BaseModel):
    negative_thought: str = Field(..., min_length=1)
    balanced_thought: str = Field(..., min_length=1)
    situation: Optional[str] = None
    emotion_before: Optional[str] = None
    emotion_after: Optional[str] = None


class CognitiveReframeResponse(BaseModel):
    id: int
    negative_thought: str
    balanced_thought: str
    situation: Optional[str] = None
    emotion_before: Optional[str] = None
    emotion_after: Optional[str] = None
    created_at: str

    class Config:
        from_attributes = True


# =============================================================================
# Emergency Plan Schemas
# =============================================================================

class EmergencyPlanCreate(BaseModel):
    trigger: str = Field(..., min_length=1)
    strategy: str = Field(..., min_length=1)
    is_active: bool = True
    effectiveness: Optional[int] = Field(default=None, ge=1, le=5)


class EmergencyPlanUpdate(BaseModel):
    trigger: Optional[str] = Field(default=None, min_length=1)
    strategy: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None
    effectiveness: Optional[int] = Field(default=None, ge=1, le=5)


class EmergencyPlanResponse(BaseModel):
    id: int
    trigger: str
    strategy: str
    is_active: bool
    effectiveness: Optional[int] = None
    created_at: str

    class Config:
        from_attributes = True


# =============================================================================
# Analysis Schemas
# =============================================================================

class WindowSchema(BaseModel):
    start: str
    end: str


class TrendSchema(BaseModel):
    metric: str
    current: float
    previous: float
    direction: Literal["up", "down", "flat"]
    percent_change: float


class RecommendationSchema(BaseModel):
    title: str
    description: str
    category: str
    priority: str
    suggested_action: str


class InsightsSchema(BaseModel):
    summary: str
    positives: List[str]
    challenges: List[str]
    weekly_score: int = Field(..., ge=0, le=100)
    performance_level: str
    advice: List[str] = []


class AnalysisResponse(BaseModel):
    """Weekly or daily analysis report."""
    generated_at: str
    window: WindowSchema
    previous_window: WindowSchema
    metrics: Dict[str, Any]
    trends: Dict[str, TrendSchema]
    highlights: List[str] = []
    recommendations: List[RecommendationSchema] = []
    insights: Optional[InsightsSchema] = None
