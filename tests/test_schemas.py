import pytest

from codegen_state.schemas import StateValidationError, WorkflowStateModel, validate_workflow_state


def test_current_state_validates(current_state):
    model = validate_workflow_state(current_state)

    assert isinstance(model, WorkflowStateModel)
    assert model.project_name == "blog-starter-x1y2"
    assert model.generated_files_map["src/index.ts"].file_purpose == "entry point"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda state: state.pop("projectUpdatesAccumulator"),
        lambda state: state.update(projectName=""),
        lambda state: state.update(latestScreenshot="shot.png"),
        lambda state: state.update(templateDetails={"name": "x"}),
        lambda state: state["inferenceContext"].update(userApiKeys={}),
        lambda state: state["generatedFilesMap"]["src/index.ts"].pop("lastDiff"),
    ],
)
def test_legacy_shapes_are_rejected(current_state, mutate):
    mutate(current_state)

    with pytest.raises(StateValidationError) as excinfo:
        validate_workflow_state(current_state)

    assert excinfo.value.errors
