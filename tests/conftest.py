import pytest

from models.pipeline import PipelineSpec, PipelineStep


@pytest.fixture
def linear_spec() -> PipelineSpec:
    return PipelineSpec(
        type="simple_rag",
        steps=[
            PipelineStep(name="Rewrite", type="transform", config={"prompt": "Rephrase: {query}"}),
            PipelineStep(name="Search", type="retrieve", config={"top_k": 8, "method": "hybrid"}),
            PipelineStep(name="Answer", type="generate", config={"model": "gpt-4o", "temperature": 0.2}),
        ],
    )


@pytest.fixture
def branching_spec() -> PipelineSpec:
    return PipelineSpec(
        type="routing",
        steps=[
            PipelineStep(name="Intent", type="classify", config={"labels": ["faq", "chat"]}),
            PipelineStep(
                name="Dispatch",
                type="route",
                config={"on": "intent"},
                branches={
                    "faq": [PipelineStep(name="FAQ search", type="retrieve", config={"top_k": 3})],
                    "chat": [PipelineStep(name="Small talk", type="generate", config={})],
                },
            ),
        ],
    )
