from typing import Any

from pydantic import BaseModel, Field


class PipelineStep(BaseModel):
    """A step in the pipeline."""
    name: str
    type: str
    config: dict[str, Any] = Field(default_factory=dict)
    branches: dict[str, list["PipelineStep"]] | None = None  # branch key -> sub-chain


PipelineStep.model_rebuild()


class ChatHistoryConfig(BaseModel):
    """Chat history options (passed through untouched by the graph transforms)."""
    include_history: bool = True
    max_history_turns: int = 5


class PipelineSpec(BaseModel):
    """Pipeline definition."""
    type: str = "custom"  # simple_rag, classify, agentic, routing, agent, custom
    steps: list[PipelineStep] = Field(default_factory=list)
    conditional_logic: dict[str, Any] | None = None
    agent_config: dict[str, Any] | None = None
    chat_history_config: ChatHistoryConfig = Field(default_factory=ChatHistoryConfig)

    class Config:
        extra = "allow"
