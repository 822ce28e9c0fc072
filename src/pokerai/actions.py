from .types import Action, ActionType


def encode_action(action: Action) -> str:
    """Query-string token sent to the game server, e.g. 'action_name=bet&amount=40'."""
    if action.type == ActionType.FOLD:
        return "action_name=fold"
    if action.type == ActionType.CALL:
        return "action_name=call"
    if action.type == ActionType.BET:
        return f"action_name=bet&amount={action.amount}"
    raise ValueError("Cannot encode an action that has not been decided")


def format_action(action: Action) -> str:
    if action.type == ActionType.FOLD:
        return "ACTION:\tFOLDING"
    if action.type == ActionType.CALL:
        return "ACTION:\tCALLING"
    if action.type == ActionType.BET:
        return f"ACTION:\tBETTING {action.amount}"
    return "No action set"
