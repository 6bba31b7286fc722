"""Key binding tables for the mode controller."""

from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from .constants import EditorConstants
from .keyboard import KeyType

if TYPE_CHECKING:
    from .controller import ModeController
    from .keyboard import KeyEvent
    from .settings import EditorSettings


Action = Callable[['ModeController', 'KeyEvent'], None]
BindingKey = Tuple[KeyType, str, frozenset]

CTRL = frozenset({"ctrl"})


class CommandRegistry:
    """Registry for mapping key combinations to actions."""

    def __init__(self):
        self._commands: Dict[BindingKey, Action] = {}

    def register(self, key_type: KeyType, value: str, action: Action,
                 modifiers: frozenset = frozenset()):
        """Register an action for a key combination."""
        self._commands[(key_type, value, modifiers)] = action

    def get_command(self, key_event: 'KeyEvent') -> Optional[Action]:
        return self._commands.get((key_event.key_type, key_event.value, key_event.modifiers))

    def execute(self, controller: 'ModeController', key_event: 'KeyEvent') -> bool:
        """Run the action bound to key_event.

        Returns:
            True if a binding existed
        """
        action = self.get_command(key_event)
        if action is None:
            return False
        action(controller, key_event)
        return True

    def __len__(self) -> int:
        return len(self._commands)


def _move_left(controller, key_event):
    controller.cursor.move_left()


def _move_down(controller, key_event):
    controller.cursor.move_down()


def _move_up(controller, key_event):
    controller.cursor.move_up()


def _move_right(controller, key_event):
    controller.cursor.move_right()


def _insert(controller, key_event):
    controller.enter_insert()


def _append(controller, key_event):
    # Step past the character under the cursor so typing appends after it
    controller.cursor.move_right_for_insert()
    controller.enter_insert()


def _command_line(controller, key_event):
    controller.enter_command(key_event.value)


def _quit(controller, key_event):
    controller.request_quit()


def _save(controller, key_event):
    controller.request_save()


def navigation_registry() -> CommandRegistry:
    """Bindings for Navigate mode."""
    registry = CommandRegistry()
    for value, special, action in (
        ('h', 'left', _move_left),
        ('j', 'down', _move_down),
        ('k', 'up', _move_up),
        ('l', 'right', _move_right),
    ):
        registry.register(KeyType.REGULAR, value, action)
        registry.register(KeyType.SPECIAL, special, action)
    registry.register(KeyType.REGULAR, 'i', _insert)
    registry.register(KeyType.REGULAR, 'a', _append)
    for prefix in EditorConstants.COMMAND_PREFIXES:
        registry.register(KeyType.REGULAR, prefix, _command_line)
    return registry


def global_registry(settings: Optional['EditorSettings'] = None) -> CommandRegistry:
    """Bindings checked before any mode gets the key."""
    quit_key = settings.quit_key if settings else EditorConstants.QUIT_KEY
    save_key = settings.save_key if settings else EditorConstants.SAVE_KEY
    registry = CommandRegistry()
    registry.register(KeyType.REGULAR, quit_key, _quit, CTRL)
    registry.register(KeyType.REGULAR, save_key, _save, CTRL)
    return registry
