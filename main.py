# -*- coding: utf-8 -*-
import sys

from PyQt6.QtWidgets import QApplication

from pidloop.gui import MainWindow
from pidloop.utils.logger import Logger

# 尝试导入主题（可选）
try:
    import qdarktheme
    HAS_DARK_THEME = True
except ImportError:
    HAS_DARK_THEME = False

logger = Logger("Main")


def main():
    """
    程序入口 (Program Entry Point)
    """
    logger.info("程序启动...")

    # 1. 创建应用程序对象
    app = QApplication(sys.argv)

    # 2. 应用现代暗色主题 (可选)
    if HAS_DARK_THEME:
        app.setStyleSheet(qdarktheme.load_stylesheet())
        logger.info("已应用暗色主题")
    else:
        logger.info("使用默认主题 (安装 pyqtdarktheme 以启用暗色主题)")

    # 3. 创建并显示主窗口
    window = MainWindow()
    window.show()

    # 4. 进入事件循环
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
