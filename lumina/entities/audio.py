# Raw little-endian signed 16-bit PCM. Rate and channel count are not carried
# by the data; callers rely on the defaults below.
RawAudioBuffer = bytes

DEFAULT_SAMPLE_RATE = 24000
DEFAULT_CHANNELS = 1
