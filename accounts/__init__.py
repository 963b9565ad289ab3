"""Account area: identity/credential policy plus the store and pages that exercise it."""
