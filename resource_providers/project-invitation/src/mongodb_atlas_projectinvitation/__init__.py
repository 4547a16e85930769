"""
MongoDB::Atlas::ProjectInvitation Resource Provider

Manages pending invitations of users to an Atlas project. Atlas keys are read from the Secrets Manager profile named
by `Profile` (`default` when unset).
"""
