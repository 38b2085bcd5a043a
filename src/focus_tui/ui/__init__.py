"""Terminal UI: controller, screens, popups and keyboard input."""
