"""Melee action-state ranges used to classify a player's situation."""

from __future__ import annotations

DYING_START = 0x000
DYING_END = 0x00A
GROUND_CONTROL_START = 0x00E
GROUND_CONTROL_END = 0x018
SQUAT_START = 0x027
SQUAT_END = 0x029
GROUND_ATTACK_START = 0x02C
GROUND_ATTACK_END = 0x040
DAMAGE_FALL = 0x026
DAMAGE_START = 0x04B
DAMAGE_END = 0x05B
GRAB = 0x0D4
CAPTURE_START = 0x0DF
CAPTURE_END = 0x0E8
COMMAND_GRAB_RANGE1_START = 0x10A
COMMAND_GRAB_RANGE1_END = 0x130
COMMAND_GRAB_RANGE2_START = 0x147
COMMAND_GRAB_RANGE2_END = 0x152
BARREL_WAIT = 0x125


def is_dead(state: int) -> bool:
    return DYING_START <= state <= DYING_END


def is_damaged(state: int) -> bool:
    return DAMAGE_START <= state <= DAMAGE_END or state == DAMAGE_FALL


def is_grabbed(state: int) -> bool:
    return CAPTURE_START <= state <= CAPTURE_END


def is_command_grabbed(state: int) -> bool:
    in_range = (COMMAND_GRAB_RANGE1_START <= state <= COMMAND_GRAB_RANGE1_END
                or COMMAND_GRAB_RANGE2_START <= state <= COMMAND_GRAB_RANGE2_END)
    return in_range and state != BARREL_WAIT


def is_punished(state: int) -> bool:
    """Damaged, tumbling or held: the player cannot act."""
    return is_damaged(state) or is_grabbed(state) or is_command_grabbed(state)


def is_in_control(state: int) -> bool:
    ground = GROUND_CONTROL_START <= state <= GROUND_CONTROL_END
    squat = SQUAT_START <= state <= SQUAT_END
    ground_attack = GROUND_ATTACK_START < state <= GROUND_ATTACK_END
    return ground or squat or ground_attack or state == GRAB
