from combo_processor.exceptions import (
    ActionError,
    BaseError,
    ConfigurationError,
    DataError,
    DecodeError,
    NotFoundError,
    ProcessingError,
    ProcessorBusyError,
    ResultFormatError,
    ValidationError,
)


def test_error_codes_and_details():
    decode = DecodeError("bad header", replay_path="a.slp")
    assert decode.error_code == "DECODE_ERROR"
    assert decode.details == {"replay_path": "a.slp", "phase": "decode"}

    action = ActionError("exists", replay_path="a.slp", operation="rename")
    assert action.error_code == "ACTION_ERROR"
    assert action.details["operation"] == "rename"
    assert action.details["phase"] == "file_action"

    assert NotFoundError("missing", path="/x").details == {"path": "/x"}
    assert ProcessorBusyError().error_code == "PROCESSOR_BUSY"
    assert ResultFormatError("bad", file_path="c.json").error_code == "RESULT_FORMAT_ERROR"


def test_hierarchy():
    assert issubclass(DecodeError, ProcessingError)
    assert issubclass(ActionError, ProcessingError)
    assert issubclass(ValidationError, ConfigurationError)
    assert issubclass(ResultFormatError, DataError)
    for cls in (ProcessingError, ConfigurationError, DataError, NotFoundError, ProcessorBusyError):
        assert issubclass(cls, BaseError)


def test_to_dict_is_serializable():
    err = ValidationError("bad field", field_name="output_file", file_path="run.yaml")
    payload = err.to_dict()

    assert payload["error_code"] == "VALIDATION_ERROR"
    assert payload["message"] == "bad field"
    assert payload["details"] == {"field_name": "output_file", "file_path": "run.yaml"}
    assert "timestamp" in payload
