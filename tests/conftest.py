"""
Shared fixtures: canned ffmpeg stderr output and a fake diagnostic source.
"""

import pytest

from camera_inventory.devices.source import BackendLaunchError


AVFOUNDATION_DEVICE_LIST = """\
[AVFoundation indev @ 0x7f8b1c004c00] AVFoundation video devices:
[AVFoundation indev @ 0x7f8b1c004c00] [0] FaceTime HD Camera
[AVFoundation indev @ 0x7f8b1c004c00] [1] Capture screen 0
[AVFoundation indev @ 0x7f8b1c004c00] [2] USB Camera
[AVFoundation indev @ 0x7f8b1c004c00] AVFoundation audio devices:
[AVFoundation indev @ 0x7f8b1c004c00] [0] MacBook Pro Microphone
: Input/output error
"""

AVFOUNDATION_CAPS_CAMERA_0 = """\
[avfoundation @ 0x7f8b1c004c00] Selected framerate (713.000000) is not supported by the device.
[avfoundation @ 0x7f8b1c004c00] Supported modes:
[avfoundation @ 0x7f8b1c004c00]   1280x720@[30.000030 30.000030]fps
[avfoundation @ 0x7f8b1c004c00]   640x480@[30.000030 30.000030]fps
[avfoundation @ 0x7f8b1c004c00]   1280x720@[15.000000 15.000000]fps
[avfoundation @ 0x7f8b1c004c00] Input/output error
0: Input/output error
"""

AVFOUNDATION_CAPS_CAMERA_2 = """\
[avfoundation @ 0x7f8b1c005d00] Supported modes:
[avfoundation @ 0x7f8b1c005d00]   1920x1080@[5.000000 5.000000]fps
"""

DSHOW_DEVICE_LIST = """\
[dshow @ 000001c8e2a1b2c0] DirectShow video devices (some may be both video and audio devices)
[dshow @ 000001c8e2a1b2c0]  "Integrated Camera"
[dshow @ 000001c8e2a1b2c0]     Alternative name "@device_pnp_usb#vid_04f2&pid_b6d9"
[dshow @ 000001c8e2a1b2c0]  "OBS Virtual Camera"
[dshow @ 000001c8e2a1b2c0]     Alternative name "@device_sw_{860BB310-5D01-11D0-BD3B-00A0C911CE86}"
[dshow @ 000001c8e2a1b2c0] DirectShow audio devices
[dshow @ 000001c8e2a1b2c0]  "Microphone Array (Realtek Audio)"
[dshow @ 000001c8e2a1b2c0]     Alternative name "@device_cm_{33D9A762-90C8-11D0-BD43-00A0C911CE86}"
dummy: Immediate exit requested
"""

DSHOW_CAPS_INTEGRATED = """\
[dshow @ 000001c8e2a1b2c0] DirectShow video device options (from video devices)
[dshow @ 000001c8e2a1b2c0]  Pin "Capture" (alternative pin name "0")
[dshow @ 000001c8e2a1b2c0]   pixel_format=yuyv422  min s=640x480 fps=24 max s=640x480 fps=30
[dshow @ 000001c8e2a1b2c0]   pixel_format=yuyv422  min s=1280x720 fps=10 max s=1280x720 fps=10
[dshow @ 000001c8e2a1b2c0]   vcodec=mjpeg  min s=640x480 fps=15 max s=640x480 fps=60
[dshow @ 000001c8e2a1b2c0]   vcodec=mjpeg  min s=1280x720 fps=15 max s=1280x720 fps=30
video=Integrated Camera: Immediate exit requested
"""

DSHOW_CAPS_OBS = """\
[dshow @ 000001c8e2a1b2c0] DirectShow video device options (from video devices)
[dshow @ 000001c8e2a1b2c0]  Pin "Video" (alternative pin name "0")
[dshow @ 000001c8e2a1b2c0]   pixel_format=nv12  min s=1920x1080 fps=30 max s=1920x1080 fps=30
[dshow @ 000001c8e2a1b2c0] Could not set video options
"""

FFMPEG_DEVICES_MACOS = """\
Devices:
 D. = Demuxing supported
 .E = Muxing supported
 --
 D  avfoundation    AVFoundation input device
  E audiotoolbox    AudioToolbox output device
 D  lavfi           Libavfilter virtual input device
"""

FFMPEG_DEVICES_WINDOWS = """\
Devices:
 D. = Demuxing supported
 .E = Muxing supported
 --
 D  dshow           DirectShow
 D  gdigrab         GDI API Windows frame grabber
 D  lavfi           Libavfilter virtual input device
  E sdl,sdl2        SDL2 output device
 D  vfwcap          VfW video capture
"""


class FakeDiagnosticSource:
    """Replays canned stderr text instead of running ffmpeg."""

    def __init__(self, outputs=None, input_formats=None, failing_targets=()):
        self.outputs = outputs or {}
        self.input_formats = input_formats if input_formats is not None else []
        self.failing_targets = set(failing_targets)
        self.calls = []

    def collect(self, format, target, options):
        self.calls.append((format, target, dict(options)))
        if target in self.failing_targets:
            raise BackendLaunchError(["ffmpeg", "-f", format, "-i", target], "No such file or directory")
        return self.outputs.get((format, target), "").splitlines()

    def list_input_formats(self):
        return list(self.input_formats)


@pytest.fixture
def avfoundation_source():
    return FakeDiagnosticSource(
        outputs={
            ("avfoundation", ""): AVFOUNDATION_DEVICE_LIST,
            ("avfoundation", "0"): AVFOUNDATION_CAPS_CAMERA_0,
            ("avfoundation", "2"): AVFOUNDATION_CAPS_CAMERA_2,
        },
        input_formats=["avfoundation", "lavfi"],
    )


@pytest.fixture
def dshow_source():
    return FakeDiagnosticSource(
        outputs={
            ("dshow", "dummy"): DSHOW_DEVICE_LIST,
            ("dshow", "video=Integrated Camera"): DSHOW_CAPS_INTEGRATED,
            ("dshow", "video=OBS Virtual Camera"): DSHOW_CAPS_OBS,
        },
        input_formats=["dshow", "gdigrab", "lavfi", "vfwcap"],
    )
