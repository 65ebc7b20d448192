"""Domain layer: object model, store ports and the create-or-update reconciler."""
