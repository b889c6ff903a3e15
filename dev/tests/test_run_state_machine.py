from combo_processor.app.run_state import RunState, RunStateMachine


def test_run_state_machine_transitions():
    fsm = RunStateMachine()
    assert fsm.state == RunState.IDLE
    assert fsm.transition(RunState.COMPLETED) is False
    assert fsm.transition(RunState.RUNNING) is True
    assert fsm.transition(RunState.RUNNING) is False
    assert fsm.transition(RunState.CANCELLED) is True
    assert fsm.is_terminal
    assert fsm.transition(RunState.RUNNING) is True
    assert fsm.transition(RunState.FAILED) is True
    assert fsm.transition(RunState.IDLE) is False
