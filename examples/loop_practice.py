"""
A/B repeat with a simulated player.

Demonstrates driving a TranscriptSession from player events: the transcript
follows playback while the loop keeps it between 0:10 and 0:20.
"""

import asyncio
import logging

from hearlingo import (
    AsyncYouTubeSource,
    SimulatedPlayback,
    TrackSelectionCache,
    TranscriptSession,
    strip_markup,
)

async def main():
    logging.basicConfig(level=logging.INFO)

    playback = SimulatedPlayback(paused=False)
    session = TranscriptSession(
        playback,
        TrackSelectionCache(AsyncYouTubeSource()),
        on_scroll=lambda position, cue: print(f"  scroll to #{position}: {strip_markup(cue.text)}"),
    )

    await session.on_navigate("https://www.youtube.com/watch?v=-vZXgApsPCQ")
    if session.status != "ready":
        print(f"Transcript unavailable: {session.error_message}")
        return

    session.loop.submit("00:10", "00:20")

    # Play 30 seconds in half-second steps
    for _ in range(60):
        playback.advance(0.5)
        cue = session.panel.index.active_cue_at(playback.current_time)
        print(f"{playback.current_time:6.1f}s  {strip_markup(cue.text) if cue else ''}")

    # Pausing opens the panel and scrolls to the current cue
    playback.pause()
    session.loop.stop()
    session.close()

if __name__ == "__main__":
    asyncio.run(main())
