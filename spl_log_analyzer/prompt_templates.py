"""
Prompt templates for the event captioner.

The model only sees the file name and the summary statistics, never the raw
samples. It is asked for strict JSON so the reply can be parsed without a
tool-calling schema.
"""

SYSTEM_PROMPT = """You are an audio engineer reviewing sound pressure level logs
from live events. Answer ONLY with a JSON object, no prose and no code fences."""

CAPTION_PROMPT = """I have an SPL (Sound Pressure Level) log file.

Filename: "{file_name}"

Log Statistics:
- Average SPL: {average_level:.2f} dB
- Max SPL: {max_level:.2f} dB
- Max SPL before 10am: {peak_before_10}
- Duration: {duration}

Task:
1. Extract the "Event Name" and "Event Date" strictly from the Filename provided above.
   - Look for dates like "2023-10-25" or "Oct 25".
   - Look for event descriptors like "Sunday Service", "Concert", "FOH".
   - Example: "2023-11-12 Sunday Service.txt" -> Event: "Sunday Service", Date: "2023-11-12".
   - If no date is found in filename, return "Unknown Date".
   - If no event name is found in filename, return the Filename itself (without extension).
2. Provide a 1-sentence summary of the loudness profile based on the stats.
3. Provide a brief "Compliance Note" (e.g. OSHA limits, concert norms).

Respond with JSON using exactly these keys:
{{"eventName": "...", "eventDate": "...", "summary": "...", "complianceNote": "..."}}
"""
