"""Field-of-view visibility analysis for vehicles on a straight road."""
