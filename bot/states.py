"""
FSM (Finite State Machine) states for admin conversation flow.
"""

from aiogram.fsm.state import State, StatesGroup


class AdminStates(StatesGroup):
    """States for interactive schedule editing."""

    entering_hours = State()
