"""FastAPI server exposing evaluation, playback and saved parades."""
