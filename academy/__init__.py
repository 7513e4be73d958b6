"""Course content platform: content tree, payload codec, quizzes, progress and certificates."""
