"""The interaction loop: prompt, autocomplete, dispatch, output log."""
