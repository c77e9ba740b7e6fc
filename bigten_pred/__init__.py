"""Big Ten baseball game outcome features and models."""
