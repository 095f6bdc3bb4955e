# main.py
#
# Interactive front end for tonetext: type a message to send it as a
# sequence of tones, or listen on the microphone and print every message
# decoded from the air.
#
# Each printable ASCII character is sent as its own tone
# (2000 Hz + code * 150 Hz), bracketed by a 1800 Hz start marker and a
# 1600 Hz end marker.
#
# Dependencies:
# pip install sounddevice numpy

import argparse
import logging
import time

from tonetext import CodecConfig, DeviceAccessError, UnsupportedCharacterError
from tonetext.config import CHAR_DURATION, SAMPLE_RATE
from tonetext.devices import open_default_codec


def start_sending(codec):
    """Gets user input and sends it once."""
    try:
        text = input("Enter text to send: ")
        if not text:
            print("Input is empty.")
            return
        codec.encode_text(text).result()
        print(f"[{time.strftime('%H:%M:%S')}] sent: {text}")
    except UnsupportedCharacterError as e:
        print(f"Error: {e}")
    except DeviceAccessError as e:
        print(f"Error sending message: {e}")
    except KeyboardInterrupt:
        print("\nStopping sender.")


def start_receiving(codec):
    """Listens until the user presses Enter, printing decoded messages."""
    def show(text):
        print(f"[{time.strftime('%H:%M:%S')}] {text}")

    unsubscribe = codec.on_decode(show)
    try:
        codec.start_listening()
        print("\nListening for messages... Press Enter to stop.")
        input()
    except DeviceAccessError as e:
        print(f"Error accessing microphone: {e}")
    except KeyboardInterrupt:
        print("\nStopping receiver.")
    finally:
        codec.stop_listening()
        unsubscribe()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="tonetext acoustic messenger")
    parser.add_argument("--sample-rate", type=int, default=SAMPLE_RATE)
    parser.add_argument("--char-duration", type=float, default=CHAR_DURATION,
                        help="Seconds per character tone (must match the other end)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


# --- Main Application Logic ---
def main(argv=None):
    """Main function to run the CLI."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="[%(levelname)s] %(message)s")

    config = CodecConfig(sample_rate=args.sample_rate, char_duration=args.char_duration)
    print("--- Acoustic Text Messenger ---")
    with open_default_codec(config) as codec:
        while True:
            choice = input("\nChoose an option:\n1. Send text\n2. Receive messages\n3. Exit\n> ").strip()
            if choice == '1':
                start_sending(codec)
            elif choice == '2':
                start_receiving(codec)
            elif choice == '3':
                break
            else:
                print("Invalid choice. Please enter 1, 2, or 3.")
    print("Goodbye!")


if __name__ == '__main__':
    main()
