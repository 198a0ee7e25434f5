#!/usr/bin/env python3
"""
Debug CLI for the response visualizer.
Paste an AI response and see the clean text and extracted visualizations.
"""

import json
import sys

try:
    import config
    from config_validator import validate_config
    from content_extractor import process_ai_content
    from error_handler import ErrorSeverity, safe_execute
    from logging_config import logger
    from response_enhancer import enhance_response
except ImportError as e:
    print(f"❌ Failed to import visualizer components: {e}")
    print("   pip install -e .")
    sys.exit(1)


class DebugCLI:
    """Command-line interface for debugging the extraction pipeline"""

    END_MARKER = ".end"

    def __init__(self, output=None):
        self.running = True
        self.enhance = False
        self.buffer = []
        self.output = output or sys.stdout

    def write(self, text: str = ""):
        print(text, file=self.output)

    def print_welcome(self):
        """Print welcome message and instructions"""
        self.write("=" * 60)
        self.write("🧩 Response Visualizer Debug CLI")
        self.write("=" * 60)
        self.write("Paste an AI response, then type .end on its own line.")
        self.write("Type .help to list the other commands.")
        self.write("=" * 60)
        self.write()

    def print_help(self):
        """Print help message"""
        self.write()
        self.write("🔧 Debug CLI Commands:")
        self.write("  .end             - Process the text pasted so far")
        self.write("  .file <path>     - Process the contents of a file")
        self.write("  .enhance         - Toggle running the response enhancer first")
        self.write("  .help            - Show this help")
        self.write("  .quit or .exit   - Exit the debug interface")
        self.write()

    def render(self, content: str) -> dict:
        """Run the pipeline over content and return the printable result."""
        if self.enhance:
            enhanced = enhance_response(content)
            content = enhanced.enhanced_text
            logger.info(f"Enhancer added {len(enhanced.visualizations)} visualization(s)")

        return process_ai_content(content).to_dict()

    def show(self, content: str):
        result = self.render(content)
        self.write("-" * 60)
        self.write(result["cleanText"])
        self.write("-" * 60)
        self.write(f"📊 {len(result['visualizations'])} visualization(s)")
        self.write(json.dumps(result["visualizations"], indent=2, ensure_ascii=False))
        self.write()

    def handle_cli_command(self, command: str) -> bool:
        """Handle a dot-command. Returns True if the input was a command."""
        command_lower = command.lower()

        if command_lower in ('.quit', '.exit'):
            self.running = False
            self.write("👋 Goodbye!")
            return True

        if command_lower == '.help':
            self.print_help()
            return True

        if command_lower == '.enhance':
            self.enhance = not self.enhance
            self.write(f"✅ Enhancer {'enabled' if self.enhance else 'disabled'}")
            return True

        if command_lower == self.END_MARKER:
            content = "\n".join(self.buffer)
            self.buffer = []
            self.show(content)
            return True

        if command_lower.startswith('.file'):
            parts = command.split(maxsplit=1)
            if len(parts) < 2:
                self.write("❌ Usage: .file <path>")
                return True

            content = safe_execute(
                _read_file, parts[1],
                context=f"Reading {parts[1]}",
                severity=ErrorSeverity.MEDIUM,
            )
            if content is None:
                self.write(f"❌ Could not read {parts[1]}")
            else:
                self.show(content)
            return True

        return False

    def process_input(self, line: str):
        if line.strip().startswith('.') and self.handle_cli_command(line.strip()):
            return
        self.buffer.append(line)

    def run(self, lines=None):
        """Main CLI loop; reads stdin unless lines are supplied."""
        if not validate_config(config):
            self.write("⚠️  Some settings were invalid and have been reset to defaults.")
        self.print_welcome()

        source = lines if lines is not None else _stdin_lines()
        try:
            for line in source:
                self.process_input(line)
                if not self.running:
                    break
        except KeyboardInterrupt:
            self.write("\n🛑 Interrupted.")

        if self.running and self.buffer:
            self.handle_cli_command(self.END_MARKER)


def _read_file(path: str) -> str:
    with open(path, encoding='utf-8') as handle:
        return handle.read()


def _stdin_lines():
    while True:
        try:
            yield input()
        except EOFError:
            return


def main():
    """Main entry point"""
    DebugCLI().run()


if __name__ == "__main__":
    main()
