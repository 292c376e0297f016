"""bsplayout - match the plugged monitors against named layouts and rearrange bspwm desktops.

Runs once per invocation (typically from a monitor hotplug hook): it loads the
configuration, picks the configuration whose monitor set equals the detected
one, then creates, moves, reorders and removes desktops through ``bspc``.
"""
