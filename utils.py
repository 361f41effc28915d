# utils.py
import logging
import os
import subprocess
import sys


# 日志配置集中在这里，由入口脚本在导入其他模块之前调用
def setup_logging(level: int = logging.INFO):
    """配置全局日志"""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def open_report_in_browser(filename: str):
    """在浏览器中打开 HTML 预览"""
    logger = logging.getLogger(__name__)
    try:
        if os.name == "nt":  # Windows
            os.startfile(filename)
        elif sys.platform == "darwin":
            subprocess.run(["open", filename], check=False)
        else:
            subprocess.run(["xdg-open", filename], check=False)
        logger.info(f"🌐 已在浏览器中打开预览: {filename}")
    except OSError as e:
        logger.warning(f"⚠️ 无法自动打开预览，请手动打开: {filename}, 错误: {e}")
