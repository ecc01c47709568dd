"""
Print a YouTube video's transcript.

Demonstrates discovering caption tracks and parsing the cues of one track.
"""

import sys

from hearlingo import YouTubeClient, choose_default_track, extract_video_id, format_seconds_to_mmss, strip_markup

def main():
    url = sys.argv[1] if len(sys.argv) > 1 else "https://www.youtube.com/watch?v=-vZXgApsPCQ"
    language = sys.argv[2] if len(sys.argv) > 2 else "en"

    client = YouTubeClient()
    video_id = extract_video_id(url)

    print(f"Fetching caption tracks for {video_id}...")
    tracks = client.get_caption_tracks(video_id)
    for track in tracks:
        print(f"  {track.language_code:6} {track.display_name}")

    track = choose_default_track(tracks, language)
    if track is None:
        print("No captions available")
        return

    print(f"\nTranscript ({track.display_name}):")
    for cue in client.get_cues(track):
        print(f"[{format_seconds_to_mmss(cue.start_seconds)}] {strip_markup(cue.text)}")

if __name__ == "__main__":
    main()
