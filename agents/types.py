"""Shared type definitions for the AI proxy client."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

InterviewType = Literal["Technical", "HR", "Behavioral"]
Difficulty = Literal["Easy", "Medium", "Hard"]
Priority = Literal["High", "Medium", "Low"]

INTERVIEW_TYPES = ("Technical", "HR", "Behavioral")
DIFFICULTIES = ("Easy", "Medium", "Hard")


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class UserProfile(WireModel):
    skills: List[str] = Field(default_factory=list)
    goals: str = ""


class User(WireModel):
    name: str
    email: str
    skills: List[str] = Field(default_factory=list)
    goals: str = ""
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")


class Question(WireModel):
    id: str
    question: str
    hint: str
    type: InterviewType
    difficulty: Difficulty
    estimated_time: int = Field(default=300, gt=0, alias="estimatedTime")  # seconds


class Evaluation(WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    score: int = Field(ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    feedback: str = ""
    improvement_areas: List[str] = Field(default_factory=list, alias="improvementAreas")


class LearningTopic(WireModel):
    id: str
    name: str
    priority: Priority = "Medium"
    description: str = ""
    estimated_hours: float = Field(default=0, ge=0, alias="estimatedHours")
    completed: bool = False


class LearningPath(WireModel):
    topics: List[LearningTopic] = Field(default_factory=list)
    goals: List[str] = Field(default_factory=list)
    estimated_time_to_improvement: str = Field(default="2-3 weeks", alias="estimatedTimeToImprovement")
    recommendations: str = "Focus on consistent practice."


class MCQQuestion(WireModel):
    id: str
    question: str
    options: List[str]
    correct: int = Field(ge=0)
    explanation: str = ""
    topic: str = ""
    difficulty: str = "Medium"


class ChatMessage(WireModel):
    role: Literal["user", "assistant"]
    content: str
