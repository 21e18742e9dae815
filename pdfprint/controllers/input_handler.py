from PyQt5.QtGui import QKeySequence


class UserInputHandler:
    """
    Maps keyboard shortcuts of the main window to controller actions.
    """
    def __init__(self, controller):
        """
        Initializes the handler with the controller that performs actions.

        Args:
            controller (DocumentViewerController): Receiver of the actions.
        """
        self.controller = controller

    def handle_key_press(self, event) -> bool:
        """
        Handles key press events for the main window.

        Returns:
            True if the event triggered an action
        """
        if event.matches(QKeySequence.Print):
            self.controller.on_print_requested()
        elif event.matches(QKeySequence.Save):
            self.controller.on_save_requested()
        elif event.matches(QKeySequence.Open):
            self.controller.on_browse_requested()
        else:
            event.ignore()
            return False

        event.accept()
        return True
