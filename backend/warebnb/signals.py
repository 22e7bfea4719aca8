# Overview: In-process signals for dashboard state changes.

from blinker import Namespace

dashboard_signals = Namespace()

# Sent after a root profile switches (or clears) its preview role.
# sender: profile id; kwargs: role (str | None), redirect (str)
role_changed = dashboard_signals.signal("role-changed")
