#!/usr/bin/env python3
"""
Demo script for online log template discovery.
"""

import tempfile
from pathlib import Path

from logmap import LogFilters, FilterSettings
from logmap.io_utils import JSONLWriter, load_filters, save_filters


def create_training_logs():
    """Sample syslog lines to learn templates from."""
    return [
        "Sep 26 09:13:15 host systemd-logind[572]: Removed session c524.",
        "Sep 27 19:27:53 host systemd-logind[572]: Removed session c525.",
        "Sep 28 13:41:26 host systemd-logind[572]: Removed session c526.",
        "Sep 16 20:17:04 laptop kernel: wlp2s0: authenticate with 00:11:22:33:44:55",
        "Sep 16 20:17:05 laptop kernel: wlp2s0: authenticated",
        "Sep 16 20:17:05 laptop kernel: wlp2s0: associated",
        "Sep 16 20:21:13 laptop sshd[811]: Accepted publickey for alice from 10.0.0.7 port 50122 ssh2",
        "Sep 16 20:22:40 laptop sshd[814]: Accepted publickey for bob from 10.0.0.9 port 50311 ssh2",
    ]


def create_new_logs():
    """Lines of a later day, some of them never seen before."""
    return [
        "Oct 02 08:00:01 host systemd-logind[572]: Removed session c611.",
        "Oct 02 08:00:03 laptop kernel: wlp2s0: authenticated",
        "Oct 02 08:01:17 laptop sshd[902]: Accepted publickey for carol from 10.0.0.4 port 40022 ssh2",
        "Oct 02 08:02:45 laptop kernel: usb 1-1: new high-speed USB device number 4",
        "Oct 02 08:03:10 laptop sshd[905]: Failed password for root from 203.0.113.5 port 2222 ssh2",
    ]


def main():
    """Run the demo."""
    print("🚀 Log Template Discovery Demo")
    print("=" * 50)

    temp_dir = tempfile.mkdtemp()
    print(f"📁 Working in temporary directory: {temp_dir}")

    try:
        # Step 1: Learn templates
        print("\n🔍 Learning templates (one differing word allowed per line)...")
        log_filters = LogFilters(FilterSettings(max_allowed_new_alternatives=1))
        for line in create_training_logs():
            log_filters.learn(line)
        print(f"✅ Learned {log_filters.template_count} templates")

        print("\n📋 Templates:")
        for record in log_filters.records():
            print(f"  {record.template_id:2}. {record}")

        # Step 2: Persist state
        state_file = Path(temp_dir) / "filters.txt"
        save_filters(log_filters, str(state_file))
        print(f"\n💾 Saved filters to: {state_file.name}")

        templates_file = Path(temp_dir) / "templates.jsonl"
        with JSONLWriter(str(templates_file)) as writer:
            writer.write_records(log_filters.records())
        print(f"💾 Exported templates to: {templates_file.name}")

        # Step 3: Classify new lines with the reloaded state
        print("\n🎯 Classifying new log lines:")
        restored = load_filters(str(state_file))
        new_logs = create_new_logs()

        known_count = 0
        for i, log_line in enumerate(new_logs, 1):
            print(f"\n  {i}. Log: {log_line}")
            print(f"     Words: {restored.line_to_words(log_line)}")
            if restored.is_known(log_line):
                known_count += 1
                print("     ✅ Known")
            else:
                print("     ❌ Unknown")

        print(f"\n📊 Summary:")
        print(f"   • Total log lines: {len(new_logs)}")
        print(f"   • Known lines: {known_count}")
        print(f"   • Unknown lines: {len(new_logs) - known_count}")

        print(f"\n🔧 Programmatic Usage Example:")
        print("```python")
        print("from logmap import LogFilters, FilterSettings")
        print("")
        print("log_filters = LogFilters(FilterSettings(max_allowed_new_alternatives=1))")
        print("for line in open('server.log'):")
        print("    log_filters.learn(line)")
        print("")
        print("if not log_filters.is_known('Sep 29 10:00:00 host sshd[1]: Accepted key'):")
        print("    print('new kind of line')")
        print("```")

        print(f"\n🎉 Demo completed successfully!")

    except Exception as e:
        print(f"\n❌ Demo failed with error: {e}")
        import traceback
        traceback.print_exc()

    finally:
        import shutil
        shutil.rmtree(temp_dir, ignore_errors=True)
        print(f"\n🧹 Cleaned up temporary directory")


if __name__ == '__main__':
    main()
