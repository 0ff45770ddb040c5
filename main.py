"""
Main entry point for Quote Me.
Provides the command-line interface for managing stored quotes.
"""

import asyncio
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from utils import (
    cli_logger, UnifiedConfigManager, initialize_logging, QuoteMeError,
    ValidationError, ImportFormatError
)
from storage import QuoteStore, JsonFileAdapter, resolve_data_dir

# 子命令别名
COMMAND_ALIASES = {
    'a': 'add',
    'l': 'list',
    'd': 'delete',
}


class QuoteMe:
    """命令行应用主类"""

    def __init__(self, store: QuoteStore, config: UnifiedConfigManager):
        self.store = store
        self.config = config

    def add_quote(self, quote: str, author: str) -> int:
        """新增语录"""
        try:
            record = self.store.add(quote, author)
        except ValidationError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

        print(f'Quote saved: "{record.quote}" - {record.author}')
        return 0

    def list_quotes(self) -> int:
        """列出全部语录"""
        records = self.store.list_quotes()
        if not records:
            print("No quotes found.")
            return 0

        for record in records:
            print(f'[{record.id}] "{record.quote}" - {record.author} (added on {record.created_at})')
        return 0

    def delete_quote(self, quote_id: str) -> int:
        """按ID删除语录"""
        if self.store.delete(quote_id):
            print(f"Quote with ID {quote_id} deleted.")
        else:
            print(f"No quote found with ID {quote_id}.")
        return 0

    def export_quotes(self, directory: Optional[Path] = None) -> int:
        """导出到当前目录下的固定文件名"""
        storage_config = self.config.get_storage_config()
        output_path = (directory or Path.cwd()) / storage_config.export_filename

        self.store.export_to(output_path)
        print(f"Database exported to: {output_path}")
        return 0

    def import_quotes(self, file: str) -> int:
        """从文件导入语录，按ID跳过重复项"""
        try:
            result = self.store.import_file(file)
        except ImportFormatError as e:
            cli_logger.info(f"[CLI] Import rejected: {e}")
            print(f"Failed to import quotes from {file}: {e.message}", file=sys.stderr)
            return 1

        print(f"Imported {result.imported} quotes from {file}")
        if result.skipped > 0:
            print(f"Skipped {result.skipped} duplicate quotes (based on UUID)")
        return 0

    async def start_web(self) -> int:
        """启动Web界面（阻塞直到终止）"""
        from api import start_web_server

        await start_web_server(self.store, self.config.get_web_config())
        return 0


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog="quote-me",
        description="A simple CLI tool for managing and storing your favorite quotes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  quote-me add "Be water." "Bruce Lee"   # 添加语录
  quote-me list                          # 列出全部语录
  quote-me delete <id>                   # 按ID删除语录
  quote-me export                        # 导出到当前目录的 quotes.json
  quote-me import backup.json            # 从文件导入语录
  quote-me web                           # 启动Web界面
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # 添加语录
    add_parser = subparsers.add_parser('add', aliases=['a'], help='Add a new quote')
    add_parser.add_argument('quote', help='The quote text')
    add_parser.add_argument('author', help='The quote author')

    # 列出语录
    subparsers.add_parser('list', aliases=['l'], help='List all saved quotes')

    # 删除语录
    delete_parser = subparsers.add_parser('delete', aliases=['d'], help='Delete a quote by ID')
    delete_parser.add_argument('id', help='The quote ID to delete')

    # 导出
    subparsers.add_parser('export', help='Export quotes to quotes.json in current directory')

    # 导入
    import_parser = subparsers.add_parser('import', help='Import quotes from file')
    import_parser.add_argument('file', help='Path to JSON file')

    # Web界面
    subparsers.add_parser('web', help='Start the web interface')

    return parser


def build_store(config: UnifiedConfigManager) -> QuoteStore:
    """解析数据目录、初始化日志并加载语录存储"""
    storage_config = config.get_storage_config()
    data_dir = resolve_data_dir(storage_config)
    initialize_logging(config.get_logging_config(), data_dir)

    store = QuoteStore(JsonFileAdapter(data_dir / storage_config.filename))
    cli_logger.info(f"[CLI] Loaded {len(store)} quotes from {store.path}")
    return store


async def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    command = COMMAND_ALIASES.get(args.command, args.command)

    try:
        config = UnifiedConfigManager()
        store = build_store(config)
    except QuoteMeError as e:
        cli_logger.error(f"[CLI] Startup failed: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        cli_logger.error(f"[CLI] Startup failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    app = QuoteMe(store, config)

    try:
        if command == 'add':
            return app.add_quote(args.quote, args.author)

        elif command == 'list':
            return app.list_quotes()

        elif command == 'delete':
            return app.delete_quote(args.id)

        elif command == 'export':
            return app.export_quotes()

        elif command == 'import':
            return app.import_quotes(args.file)

        elif command == 'web':
            return await app.start_web()

        else:
            parser.print_help()
            return 2

    except KeyboardInterrupt:
        cli_logger.info("[CLI] Received keyboard interrupt")
        return 130
    except QuoteMeError as e:
        cli_logger.error(f"[CLI] {command} failed: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        cli_logger.error(f"[CLI] {command} failed: {e}", exc_info=True)
        return 1


def run():
    """控制台脚本入口"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
