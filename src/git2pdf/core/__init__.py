"""Core data models shared by every stage of the pipeline."""
