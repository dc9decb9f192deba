"""Transcription-to-score notation library.

This package turns a structured musical transcription (tempo, key, time
signature and measures of pitched notes) into a staff-notation score
painted on a fixed-size raster surface, and exports it as a PNG image.

The rendering pipeline consists of:
1. Loading and validating the transcription
2. Planning staff systems, measure boundaries and note positions
3. Composing the glyph display list (staff lines, clefs, notes, bar lines)
4. Painting the glyphs onto a drawing surface
5. Exporting the surface as PNG

Example:
    Basic usage through the pipeline API:

    >>> from transcription_to_score.pipeline import load_transcription, render_to_png
    >>>
    >>> transcription = load_transcription(json_text)
    >>> png_bytes = render_to_png(transcription)
"""
