"""Staff-facing administration site for the pet shelter."""
