"""Socket table enumeration."""
