"""vibecut — prompt-driven video edits.

Turn a natural-language "vibe" prompt and a source video into an edited
video: resolve three ffmpeg filter directives (Gemini, or keyword rules
when that fails), transcode with ffmpeg, optionally composite an animated
overlay, and watermark output that has no valid license.
"""
