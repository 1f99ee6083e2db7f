from asciimatics.widgets import Button, CheckBox, Divider, DropdownList, Frame, Label, Layout

from settings import MAX_BRUSH_SIZE, MIN_BRUSH_SIZE, Tool


# NOTE: renamed to avoid clashing with Frame.palette attribute.
class ColorPalette:
    """
    A column of color buttons, one per palette entry.
    """
    def __init__(self, frame, colors, on_color_change):
        self.frame = frame
        self.on_color_change = on_color_change
        self.colors = colors

        layout = Layout([1])
        self.frame.add_layout(layout)
        layout.add_widget(Label("Color:"))
        for name, color in self.colors:
            # Buttons cannot be tinted, so label them with the color instead.
            button = Button(
                f"{name} {color.hex}",
                on_click=lambda c=color: self._select_color(c)
            )
            layout.add_widget(button)

    def _select_color(self, color):
        self.on_color_change(color)


class ToolSelector:
    """
    Dropdown of drawing tools plus the filled-shapes toggle.
    """

    def __init__(self, frame, settings, on_change):
        self.frame = frame
        self.settings = settings
        self.on_change = on_change

        layout = Layout([1])
        self.frame.add_layout(layout)

        tools = [(tool.value.capitalize(), tool) for tool in Tool]
        self.dropdown = DropdownList(tools, label="Tool:", on_change=self._on_tool_change)
        self.dropdown.value = settings.tool
        layout.add_widget(self.dropdown)

        self.fill_box = CheckBox("Filled shapes", on_change=self._on_fill_change)
        self.fill_box.value = settings.fill_shapes
        layout.add_widget(self.fill_box)

    def _on_tool_change(self):
        self.settings.set_tool(self.dropdown.value)
        self.on_change()

    def _on_fill_change(self):
        self.settings.fill_shapes = bool(self.fill_box.value)
        self.on_change()

    def sync(self):
        self.dropdown.value = self.settings.tool
        self.fill_box.value = self.settings.fill_shapes


class BrushSizeSelector:
    """
    A simple dropdown list to choose brush size.
    """

    def __init__(self, frame, settings, on_change):
        self.frame = frame
        self.settings = settings
        self.on_change = on_change

        layout = Layout([1])
        self.frame.add_layout(layout)

        # Create dropdown options as list of tuples (display_text, value)
        sizes = [(str(i), i) for i in range(MIN_BRUSH_SIZE, MAX_BRUSH_SIZE + 1)]

        self.dropdown = DropdownList(sizes, label="Brush Size:", on_change=self._on_size_change)
        self.dropdown.value = settings.brush_size
        layout.add_widget(self.dropdown)

    def _on_size_change(self):
        self.settings.set_brush_size(self.dropdown.value)
        self.on_change()

    def sync(self):
        self.dropdown.value = self.settings.brush_size


class UIFrame(Frame):
    """
    The control panel: palette, tool and size pickers, actions and a status line.
    """
    def __init__(self, screen, controller, config):
        super(UIFrame, self).__init__(
            screen,
            screen.height,
            screen.width // config.panel_fraction,
            x=screen.width - screen.width // config.panel_fraction,
            y=0,
            has_border=True,
            name="UI"
        )
        # Track whether the UI currently has focus (e.g., the mouse is over the UI region)
        self.has_focus: bool = False
        self.controller = controller
        self.config = config
        settings = controller.settings

        # Selectors fire on_change while initialising, so the label must exist first.
        self.status = Label("", height=2)
        self.tool_selector = ToolSelector(self, settings, self.refresh_status)
        self.brush_selector = BrushSizeSelector(self, settings, self.refresh_status)
        layout = Layout([1])
        self.add_layout(layout)
        layout.add_widget(Divider())
        self.color_palette = ColorPalette(self, config.palette, self._on_color_change)

        actions = Layout([1, 1, 1])
        self.add_layout(actions)
        actions.add_widget(Button("Undo", self.controller.undo), 0)
        actions.add_widget(Button("Clear", self.controller.clear), 1)
        actions.add_widget(Button("Save", self.save), 2)

        footer = Layout([1], fill_frame=True)
        self.add_layout(footer)
        footer.add_widget(Divider())
        footer.add_widget(self.status)
        self.fix()
        self.refresh_status()

    def _on_color_change(self, color):
        self.controller.settings.set_color(color)
        self.refresh_status()

    def save(self):
        try:
            self.controller.save(self.config.export_path)
        except OSError as exc:
            self.show_message(f"Save failed: {exc.strerror or exc}")

    def sync(self):
        """Pulls settings changed elsewhere (keyboard shortcuts) into the widgets."""
        self.tool_selector.sync()
        self.brush_selector.sync()
        self.refresh_status()

    def refresh_status(self, message=None):
        settings = self.controller.settings
        line = f"{settings.tool.value} {settings.color.hex} size {settings.brush_size}"
        if settings.fill_shapes:
            line += " filled"
        if message:
            line = f"{line} | {message}"
        self.status.text = line

    def show_message(self, message):
        self.refresh_status(message)
